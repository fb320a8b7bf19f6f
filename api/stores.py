from __future__ import annotations

from flask import Blueprint, jsonify, request
from sqlalchemy import func

from api.utils.helpers import json_body, page_meta, parse_pagination, services
from models import storage
from models.item import Item
from models.schemas.store import StoreSchema
from models.store import Store
from models.user import Role
from utils.decorators import jwt_required, roles_required
from utils.exceptions import AppError

bp = Blueprint("stores", __name__)

store_schema = StoreSchema()
stores_schema = StoreSchema(many=True)


class StoreInUse(AppError):
    status = 409
    code = "CONFLICT"
    message = "Cannot delete a store that items still reference."


@bp.post("/stores")
@jwt_required()
def create_store():
    """
    Create a store
    ---
    tags: [Stores]
    security:
      - Bearer: []
    consumes: [application/json]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, location]
          properties:
            name: { type: string }
            location: { type: string }
            contact_number: { type: string }
            website: { type: string }
    responses:
      201: { description: Created }
      400: { description: Validation error }
      401: { description: Unauthorized }
    """
    store = services()["stores"].create(json_body())
    return jsonify({"data": store_schema.dump(store)}), 201


@bp.get("/stores")
@jwt_required()
def list_stores():
    """
    List stores (pagination, q search on name)
    ---
    tags: [Stores]
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
      - in: query
        name: q
        type: string
    responses:
      200: { description: OK }
    """
    repo = services()["stores"]
    page, limit = parse_pagination()
    query = repo.query()
    q = request.args.get("q")
    if q:
        query = query.filter(func.lower(Store.name).like(f"%{q.strip().lower()}%"))
    rows, total = repo.list(query, page=page, limit=limit, order_by=(Store.name.asc(),))
    return jsonify({"data": stores_schema.dump(rows), "meta": page_meta(page, limit, total)})


@bp.get("/stores/<store_id>")
@jwt_required()
def get_store(store_id: str):
    """
    Get a store by id
    ---
    tags: [Stores]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: store_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify({"data": store_schema.dump(services()["stores"].get(store_id))})


@bp.patch("/stores/<store_id>")
@jwt_required()
def update_store(store_id: str):
    """
    Update a store (partial)
    ---
    tags: [Stores]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: store_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
    responses:
      200: { description: OK }
      400: { description: Validation error }
      404: { description: Not found }
    """
    store = services()["stores"].update(store_id, json_body())
    return jsonify({"data": store_schema.dump(store)})


@bp.delete("/stores/<store_id>")
@roles_required(Role.ADMIN)
def delete_store(store_id: str):
    """
    Delete a store - admin
    ---
    tags: [Stores]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: store_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
      409: { description: Items still reference this store }
    """
    repo = services()["stores"]
    store = repo.get(store_id)
    # RESTRICT: do not allow delete while items reference the store
    in_use = storage.get_session().query(Item.id).filter(Item.store_id == store.id).first()
    if in_use:
        raise StoreInUse()
    repo.delete(store_id)
    return ("", 204)
