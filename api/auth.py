"""
Authentication blueprint:
- POST /auth/register
- POST /auth/login
- POST /auth/logout
- GET  /auth/me

Passwords are hashed with argon2 and tokens are HS256 JWTs (see
utils.security). Logout puts the presented token on the revocation list
until its own expiry.
"""
from __future__ import annotations

from flask import Blueprint, jsonify, g

from api.utils.helpers import json_body, services
from models.schemas.user import UserLoginSchema, UserOutSchema
from utils.decorators import jwt_required
from utils.exceptions import NotFound

bp = Blueprint("auth", __name__)

user_out_schema = UserOutSchema()
user_login_schema = UserLoginSchema()


@bp.post("/register")
def register():
    """
    Register a new identity.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [email, password, name]
          properties:
            email: { type: string }
            password: { type: string, minLength: 6 }
            name: { type: string }
            role: { type: string, enum: [user, admin], default: user }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Email already registered
    """
    payload = json_body()
    user = services()["credentials"].register(
        email=payload.get("email"),
        password=payload.get("password"),
        name=payload.get("name"),
        role=payload.get("role"),
    )
    return jsonify({"data": user_out_schema.dump(user)}), 201


@bp.post("/login")
def login():
    """
    Login: returns a bearer token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns token and user)
      401:
        description: Invalid credentials
    """
    data = user_login_schema.load(json_body())
    svc = services()
    user = svc["credentials"].authenticate(data["email"], data["password"])
    tokens = svc["tokens"]

    return jsonify(
        {
            "token": tokens.issue(user),
            "token_type": "bearer",
            "expires_in": int(tokens.ttl.total_seconds()),
            "user": user_out_schema.dump(user),
        }
    ), 200


@bp.post("/logout")
@jwt_required()
def logout():
    """
    Logout: revokes the presented token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Token revoked
      401:
        description: Unauthorized
    """
    services()["revocations"].revoke(g.auth.token, g.auth.expires_at)
    return ("", 204)


@bp.get("/me")
@jwt_required()
def me():
    """
    Current identity
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      404:
        description: Identity was deleted
    """
    user = services()["credentials"].get(g.auth.user_id)
    if user is None:
        raise NotFound("Identity not found")
    return jsonify({"data": user_out_schema.dump(user)}), 200
