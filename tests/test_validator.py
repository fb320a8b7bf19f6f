"""Unit tests for models/schemas/validator.py -- named schemas checked before writes."""

from __future__ import annotations

import pytest
from marshmallow import ValidationError

from models.item import ItemCategory, Unit
from models.schemas.validator import SchemaValidator
from models.user import Role

ITEM = {
    "name": "Milk",
    "category": "Dairy",
    "quantity": 2,
    "unit": "liters",
    "storage_location": "Fridge",
    "price": 1.49,
    "barcodes": [{"code": "4006381333931"}],
    "store_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
}

RECIPE = {
    "name": "Pancakes",
    "servings": 4,
    "prep_time": 10,
    "cook_time": 15,
    "difficulty": "Easy",
    "ingredients": [{"item_id": "i-1", "quantity": 0.5, "unit": "liters"}],
    "steps": [
        {"step_number": 1, "description": "Mix"},
        {"step_number": 2, "description": "Fry", "duration": 10},
    ],
}


@pytest.fixture
def validator():
    return SchemaValidator()


def test_registry_names(validator):
    assert validator.names == ["identity", "item", "recipe", "store", "token-blacklist"]


def test_unknown_schema_name(validator):
    with pytest.raises(KeyError):
        validator.validate("orders", {})


def test_valid_item_loads_enums(validator):
    data = validator.enforce("item", ITEM)
    assert data["category"] is ItemCategory.DAIRY
    assert data["unit"] is Unit.LITERS


def test_missing_unit_is_named(validator):
    doc = {k: v for k, v in ITEM.items() if k != "unit"}
    result = validator.validate("item", doc)
    assert result.valid is False
    assert list(result.errors) == ["unit"]


def test_every_violation_is_reported(validator):
    doc = dict(ITEM, quantity=0, category="Candy", price=-1, unit="bushel")
    doc.pop("name")
    with pytest.raises(ValidationError) as exc:
        validator.enforce("item", doc)
    assert set(exc.value.messages) == {"quantity", "category", "price", "unit", "name"}


def test_closed_schema_rejects_unknown_field(validator):
    result = validator.validate("item", dict(ITEM, colour="white"))
    assert result.errors == {"colour": ["Unknown field."]}


def test_quantity_must_be_integer(validator):
    assert not validator.validate("item", dict(ITEM, quantity=1.5)).valid


def test_nested_barcode_shape(validator):
    result = validator.validate("item", dict(ITEM, barcodes=[{"code": "1"}, {"store_id": "s"}]))
    assert result.errors == {"barcodes": {1: {"code": ["Missing data for required field."]}}}


def test_partial_checks_only_supplied_fields(validator):
    assert validator.validate("item", {"quantity": 3}, partial=True).valid
    assert validator.validate("item", {"quantity": 0}, partial=True).errors.keys() == {"quantity"}


def test_partial_still_validates_array_elements(validator):
    result = validator.validate("item", {"barcodes": [{}]}, partial=True)
    assert "barcodes" in result.errors


def test_partial_still_rejects_unknown_fields(validator):
    assert not validator.validate("store", {"owner": "me"}, partial=True).valid


def test_non_object_document(validator):
    assert not validator.validate("store", ["name"]).valid


def test_store_requires_name_and_location(validator):
    result = validator.validate("store", {"website": "https://example.com"})
    assert set(result.errors) == {"name", "location"}


def test_identity_defaults_role_and_normalizes_email(validator):
    data = validator.enforce("identity", {"email": " A@X.com ", "password": "secret1", "name": "A"})
    assert data["email"] == "a@x.com"
    assert data["role"] is Role.USER


def test_identity_is_open(validator):
    data = validator.enforce("identity", {"email": "a@x.com", "password": "secret1", "name": "A", "nickname": "aa"})
    assert "nickname" not in data


@pytest.mark.parametrize(
    "doc,field",
    [
        ({"email": "not-an-email", "password": "secret1", "name": "A"}, "email"),
        ({"email": "a@x.com", "password": "short", "name": "A"}, "password"),
        ({"email": "a@x.com", "password": "secret1", "name": "A", "role": "root"}, "role"),
        ({"email": "a@x.com", "password": "secret1"}, "name"),
    ],
)
def test_identity_violations(validator, doc, field):
    assert field in validator.validate("identity", doc).errors


def test_recipe_valid(validator):
    assert validator.validate("recipe", RECIPE).valid


def test_recipe_nested_violations(validator):
    doc = dict(
        RECIPE,
        ingredients=[{"item_id": "i-1", "quantity": 0, "unit": "cups"}],
        steps=[{"step_number": 0}],
        rating=6,
    )
    errors = validator.validate("recipe", doc).errors
    assert set(errors["ingredients"][0]) == {"quantity", "unit"}
    assert set(errors["steps"][0]) == {"step_number", "description"}
    assert "rating" in errors


def test_recipe_duplicate_step_numbers(validator):
    doc = dict(RECIPE, steps=[{"step_number": 1, "description": "a"}, {"step_number": 1, "description": "b"}])
    assert "steps" in validator.validate("recipe", doc).errors


def test_token_blacklist_schema(validator):
    assert validator.validate("token-blacklist", {"token": "abc", "expires_at": "2026-01-01T00:00:00+00:00"}).valid
    assert set(validator.validate("token-blacklist", {"token": ""}).errors) == {"token", "expires_at"}
