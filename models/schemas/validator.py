"""
Named structural contracts checked before any write reaches the database.

This is the in-process layer. The models' NOT NULL / UNIQUE / CHECK
constraints and constrained enums are the second, storage-level layer and
catch whatever slips past here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from marshmallow import Schema, ValidationError

from models.schemas.blacklisted_token import BlacklistedTokenSchema
from models.schemas.item import ItemSchema
from models.schemas.recipe import RecipeSchema
from models.schemas.store import StoreSchema
from models.schemas.user import IdentitySchema


@dataclass
class ValidationResult:
    valid: bool
    errors: Dict = field(default_factory=dict)


class SchemaValidator:
    def __init__(self, schemas: Mapping[str, Schema] | None = None):
        self._schemas: Dict[str, Schema] = dict(schemas if schemas is not None else default_schemas())

    @property
    def names(self):
        return sorted(self._schemas)

    def schema(self, name: str) -> Schema:
        try:
            return self._schemas[name]
        except KeyError:
            raise KeyError(f"unknown schema: {name}") from None

    def enforce(self, name: str, document, partial: bool = False) -> dict:
        """
        Load document against the named schema and return the cleaned data.
        Raises ValidationError listing every violated field.

        With partial=True only the fields present are checked, which is what
        an update needs; nested elements of a supplied array are still
        validated in full.
        """
        schema = self.schema(name)
        if document is None or not isinstance(document, Mapping):
            raise ValidationError({"_schema": ["Document must be an object."]})
        if partial:
            # top-level names only: required-ness inside nested arrays still holds
            return schema.load(document, partial=tuple(schema.fields))
        return schema.load(document)

    def validate(self, name: str, document, partial: bool = False) -> ValidationResult:
        try:
            self.enforce(name, document, partial=partial)
        except ValidationError as err:
            return ValidationResult(valid=False, errors=err.normalized_messages())
        return ValidationResult(valid=True)


def default_schemas() -> Dict[str, Schema]:
    return {
        "identity": IdentitySchema(),
        "item": ItemSchema(),
        "store": StoreSchema(),
        "recipe": RecipeSchema(),
        "token-blacklist": BlacklistedTokenSchema(),
    }
