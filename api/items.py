from __future__ import annotations

from flask import Blueprint, abort, jsonify, request

from api.utils.helpers import json_body, page_meta, parse_pagination, services
from models.item import Item, ItemCategory, StorageLocation
from models.schemas.item import ItemSchema
from models.user import Role
from utils.decorators import jwt_required, roles_required

bp = Blueprint("items", __name__)

item_schema = ItemSchema()
items_schema = ItemSchema(many=True)

# Sorting allowlist: API field -> SQLAlchemy column
SORT_COLUMNS = {
    "name": Item.name,
    "quantity": Item.quantity,
    "price": Item.price,
    "expiry_date": Item.expiry_date,
    "created_at": Item.created_at,
}


def parse_sort():
    sort_param = request.args.get("sort", "name")
    order_by = []
    for f in [s.strip() for s in sort_param.split(",") if s.strip()]:
        desc = f.startswith("-")
        key = f[1:] if desc else f
        col = SORT_COLUMNS.get(key)
        if col is None:
            abort(400, description=f"Unsupported sort field: {key}")
        order_by.append(col.desc() if desc else col.asc())
    return order_by or [Item.name.asc()]


def _enum_arg(name: str, enum_cls):
    raw = request.args.get(name)
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        abort(400, description=f"{name} must be one of: {allowed}")


def apply_filters(query):
    category = _enum_arg("category", ItemCategory)
    location = _enum_arg("storage_location", StorageLocation)
    store_id = request.args.get("store_id")

    if category:
        query = query.filter(Item.category == category)
    if location:
        query = query.filter(Item.storage_location == location)
    if store_id:
        query = query.filter(Item.store_id == store_id)
    return query


@bp.post("/items")
@jwt_required()
def create_item():
    """
    Create an item
    ---
    tags:
      - Items
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, category, quantity, unit, storage_location, price, barcodes, store_id]
          properties:
            name: { type: string }
            category:
              type: string
              enum: [Dairy, Vegetables, Fruits, Meat, Grains, Snacks, Drinks, Other]
            quantity: { type: integer, minimum: 1 }
            unit:
              type: string
              enum: [pcs, kg, g, liters, ml, pack, bottle, can, box, other]
            storage_location:
              type: string
              enum: [Fridge, Pantry, Freezer]
            price: { type: number, minimum: 0 }
            barcodes:
              type: array
              items:
                type: object
                required: [code]
                properties:
                  code: { type: string }
                  store_id: { type: string }
            store_id: { type: string }
            expiry_date: { type: string, format: date }
            date_purchased: { type: string, format: date }
    responses:
      201:
        description: Created
      400:
        description: Validation error (every violated field is listed)
      401:
        description: Unauthorized
    """
    item = services()["items"].create(json_body())
    return jsonify({"data": item_schema.dump(item)}), 201


@bp.get("/items")
@jwt_required()
def list_items():
    """
    List items with pagination, sorting and filters
    ---
    tags:
      - Items
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
        name: sort
        type: string
        description: "Comma-separated fields; prefix with '-' for desc. Allowed: name, quantity, price, expiry_date, created_at"
        default: "name"
      - in: query
        name: category
        type: string
      - in: query
        name: storage_location
        type: string
      - in: query
        name: store_id
        type: string
    responses:
      200:
        description: List of items
    """
    repo = services()["items"]
    page, limit = parse_pagination()
    order_by = parse_sort()
    rows, total = repo.list(apply_filters(repo.query()), page=page, limit=limit, order_by=order_by)
    return jsonify({"data": items_schema.dump(rows), "meta": page_meta(page, limit, total)})


@bp.get("/items/<item_id>")
@jwt_required()
def get_item(item_id: str):
    """
    Get a single item by id
    ---
    tags:
      - Items
    security:
      - Bearer: []
    parameters:
      - in: path
        name: item_id
        type: string
        required: true
    responses:
      200:
        description: Item found
      404:
        description: Not found
    """
    return jsonify({"data": item_schema.dump(services()["items"].get(item_id))})


@bp.patch("/items/<item_id>")
@jwt_required()
def update_item(item_id: str):
    """
    Update an item (partial). Supplied fields are validated, arrays in full.
    ---
    tags:
      - Items
    security:
      - Bearer: []
    parameters:
      - in: path
        name: item_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
    responses:
      200:
        description: Updated
      400:
        description: Validation error
      404:
        description: Not found
    """
    item = services()["items"].update(item_id, json_body())
    return jsonify({"data": item_schema.dump(item)})


@bp.delete("/items/<item_id>")
@roles_required(Role.ADMIN)
def delete_item(item_id: str):
    """
    Delete an item - admin
    ---
    tags:
      - Items
    security:
      - Bearer: []
    parameters:
      - in: path
        name: item_id
        type: string
        required: true
    responses:
      204:
        description: Deleted
      404:
        description: Not found
    """
    services()["items"].delete(item_id)
    return ("", 204)
