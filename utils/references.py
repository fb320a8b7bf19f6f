"""Reference checks run after schema validation and before the write."""
from __future__ import annotations

from marshmallow import ValidationError

from models.item import Item
from models.store import Store


def _missing_ids(session, model, ids) -> set:
    ids = {i for i in ids if i}
    if not ids:
        return set()
    found = {row.id for row in session.query(model.id).filter(model.id.in_(ids)).all()}
    return ids - found


def check_item_references(session, data: dict) -> None:
    errors = {}
    if "store_id" in data and _missing_ids(session, Store, [data["store_id"]]):
        errors["store_id"] = ["Store not found."]

    barcode_errors = {}
    for idx, barcode in enumerate(data.get("barcodes") or []):
        store_id = barcode.get("store_id")
        if store_id and _missing_ids(session, Store, [store_id]):
            barcode_errors[idx] = {"store_id": ["Store not found."]}
    if barcode_errors:
        errors["barcodes"] = barcode_errors

    if errors:
        raise ValidationError(errors)


def check_recipe_references(session, data: dict) -> None:
    ingredients = data.get("ingredients") or []
    missing = _missing_ids(session, Item, [i.get("item_id") for i in ingredients])
    if not missing:
        return
    errors = {
        idx: {"item_id": ["Item not found."]}
        for idx, ingredient in enumerate(ingredients)
        if ingredient.get("item_id") in missing
    }
    raise ValidationError({"ingredients": errors})
