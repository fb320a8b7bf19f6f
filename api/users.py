from __future__ import annotations

from flask import Blueprint, jsonify, g

from api.utils.helpers import json_body, page_meta, parse_pagination, services
from models.credential_store import normalize_email
from models.schemas.user import UserOutSchema, UserUpdateSchema
from models.user import Role
from utils.decorators import jwt_required, roles_required
from utils.exceptions import Forbidden, NotFound

bp = Blueprint("users", __name__)

user_out_schema = UserOutSchema()
user_list_out_schema = UserOutSchema(many=True)
user_update_schema = UserUpdateSchema()


def _load_owned(email: str):
    """
    Resolve the identity behind <email> for the caller.

    Ownership is the token subject matching the stored id, so a token from a
    deleted identity never reaches a later one that reuses the email.
    A missing identity is 404 for an admin or for the caller's own address,
    403 for anyone else.
    """
    user = services()["credentials"].find_by_email(email)
    if user is None:
        if g.auth.is_admin or g.auth.email == normalize_email(email):
            raise NotFound("Identity not found")
        raise Forbidden(reason="not_owner")
    if not g.auth.is_admin and user.id != g.auth.user_id:
        raise Forbidden(reason="not_owner")
    return user


@bp.get("/users")
@roles_required(Role.ADMIN)
def list_users():
    """
    List identities - admin
    ---
    tags:
      - Users
    security:
      - Bearer: []
    parameters:
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 20
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
      403: { description: Forbidden }
    """
    page, limit = parse_pagination()
    rows, total = services()["credentials"].list(page=page, limit=limit)
    return jsonify({"data": user_list_out_schema.dump(rows), "meta": page_meta(page, limit, total)})


@bp.get("/users/<email>")
@jwt_required()
def get_user(email: str):
    """
    Read a profile - self or admin
    ---
    tags:
      - Users
    security:
      - Bearer: []
    parameters:
      - in: path
        name: email
        type: string
        required: true
    responses:
      200: { description: OK }
      403: { description: Forbidden }
      404: { description: Not found }
    """
    user = _load_owned(email)
    return jsonify({"data": user_out_schema.dump(user)})


@bp.patch("/users/<email>")
@jwt_required()
def update_user(email: str):
    """
    Update a profile (partial) - self or admin. Only an admin may change role.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: path
        name: email
        type: string
        required: true
      - in: body
        name: body
        schema:
          type: object
          properties:
            name: { type: string }
            password: { type: string, minLength: 6 }
            role: { type: string, enum: [user, admin] }
    responses:
      200: { description: OK }
      400: { description: Validation error }
      403: { description: Forbidden }
      404: { description: Not found }
    """
    user = _load_owned(email)
    data = user_update_schema.load(json_body())
    if "role" in data and not g.auth.is_admin:
        raise Forbidden(reason="role_change_by_non_admin")

    user = services()["credentials"].update_by_email(user.email, data)
    return jsonify({"data": user_out_schema.dump(user)})


@bp.delete("/users/<email>")
@jwt_required()
def delete_user(email: str):
    """
    Delete an identity - self or admin. Irreversible.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    parameters:
      - in: path
        name: email
        type: string
        required: true
    responses:
      204: { description: Deleted }
      403: { description: Forbidden }
      404: { description: Not found }
    """
    user = _load_owned(email)
    svc = services()
    svc["credentials"].delete_by_email(user.email)
    if user.id == g.auth.user_id:
        svc["revocations"].revoke(g.auth.token, g.auth.expires_at)
    return ("", 204)
