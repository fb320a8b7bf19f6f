"""
Table constraints in models/*.py, exercised without the schema layer.

Rows go straight to storage.new/save; the database itself must refuse
anything that breaks a NOT NULL, CHECK, enum or foreign-key rule.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from models import storage
from models.item import Item, ItemCategory, StorageLocation, Unit
from models.recipe import Difficulty, Recipe
from models.store import Store
from models.user import Role, User


@pytest.fixture
def store(app):
    s = Store(name="Corner Market", location="Main St 1")
    storage.new(s)
    storage.save()
    return s


def _item(store_id, **overrides):
    fields = dict(
        name="Milk",
        category=ItemCategory.DAIRY,
        quantity=2,
        unit=Unit.LITERS,
        storage_location=StorageLocation.FRIDGE,
        price=1.49,
        barcodes=[],
        store_id=store_id,
    )
    fields.update(overrides)
    return Item(**fields)


def _recipe(**overrides):
    fields = dict(
        name="Hot milk",
        servings=1,
        prep_time=1,
        cook_time=5,
        ingredients=[],
        steps=[],
        difficulty=Difficulty.EASY,
    )
    fields.update(overrides)
    return Recipe(**fields)


def _rejected(obj, model):
    before = storage.count(model)
    storage.new(obj)
    with pytest.raises(IntegrityError):
        storage.save()
    assert storage.count(model) == before


def test_valid_item_is_stored(store):
    storage.new(_item(store.id))
    storage.save()
    assert storage.count(Item) == 1


@pytest.mark.parametrize("overrides", [{"quantity": 0}, {"quantity": -3}, {"price": -0.01}])
def test_item_checks(store, overrides):
    _rejected(_item(store.id, **overrides), Item)


def test_item_requires_existing_store(app):
    _rejected(_item("no-such-store"), Item)


def test_item_unit_enum_enforced(store):
    session = storage.get_session()
    with pytest.raises(IntegrityError):
        session.execute(
            text(
                "INSERT INTO items (id, name, category, quantity, unit, storage_location, price, barcodes, store_id) "
                "VALUES (:id, 'Milk', 'Dairy', 1, 'bushel', 'Fridge', 1.0, '[]', :store_id)"
            ),
            {"id": str(uuid.uuid4()), "store_id": store.id},
        )
    session.rollback()
    assert storage.count(Item) == 0


@pytest.mark.parametrize("rating", [0, 6])
def test_recipe_rating_range(app, rating):
    _rejected(_recipe(rating=rating), Recipe)


def test_recipe_servings_positive(app):
    _rejected(_recipe(servings=0), Recipe)


def test_user_name_must_not_be_empty(app):
    _rejected(User(email="a@x.com", password_hash="digest", name="", role=Role.USER), User)


def test_user_email_unique(app):
    storage.new(User(email="a@x.com", password_hash="digest", name="A", role=Role.USER))
    storage.save()
    _rejected(User(email="a@x.com", password_hash="digest", name="B", role=Role.USER), User)


def test_store_location_must_not_be_empty(app):
    _rejected(Store(name="Corner Market", location=""), Store)
