"""
Schema-checked persistence for stores, items and recipes.

Every create is validated against the full schema and every update against
the fields it changes, before the row is added to the session. An optional
check_references(session, data) hook runs after validation and raises
ValidationError for ids that point nowhere. One commit per call.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

from models.schemas.validator import SchemaValidator
from utils.exceptions import NotFound


class ResourceStore:
    def __init__(
        self,
        storage,
        validator: SchemaValidator,
        model,
        schema_name: str,
        check_references: Optional[Callable] = None,
    ):
        self._storage = storage
        self._validator = validator
        self.model = model
        self.schema_name = schema_name
        self._check_references = check_references

    def query(self):
        return self._storage.get_session().query(self.model)

    def get(self, obj_id: str):
        obj = self._storage.get(self.model, obj_id)
        if obj is None:
            raise NotFound(f"{self.model.__name__} not found")
        return obj

    def list(self, query=None, page: int = 1, limit: int = 20, order_by=None) -> Tuple[list, int]:
        query = query if query is not None else self.query()
        total = query.count()
        if order_by is not None:
            query = query.order_by(*order_by)
        rows = query.offset((page - 1) * limit).limit(limit).all()
        return rows, total

    def _load(self, document, partial: bool = False) -> dict:
        data = self._validator.enforce(self.schema_name, document, partial=partial)
        if self._check_references is not None:
            self._check_references(self._storage.get_session(), data)
        return data

    def create(self, document):
        data = self._load(document)
        obj = self.model(**data)
        self._storage.new(obj)
        self._storage.save()
        return obj

    def update(self, obj_id: str, changes):
        obj = self.get(obj_id)
        data = self._load(changes, partial=True)
        for key, value in data.items():
            setattr(obj, key, value)
        self._storage.new(obj)
        self._storage.save()
        return obj

    def delete(self, obj_id: str) -> None:
        obj = self.get(obj_id)
        self._storage.delete(obj)
        self._storage.save()
