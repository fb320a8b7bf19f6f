from marshmallow import RAISE, Schema, ValidationError, fields, validate, validates_schema

from models.item import Unit
from models.recipe import Difficulty


class IngredientSchema(Schema):
    class Meta:
        unknown = RAISE

    item_id = fields.String(required=True)
    quantity = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    # kept as plain strings inside the JSON column
    unit = fields.String(required=True, validate=validate.OneOf([u.value for u in Unit]))
    notes = fields.String(allow_none=True)


class StepSchema(Schema):
    class Meta:
        unknown = RAISE

    step_number = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))
    description = fields.String(required=True, validate=validate.Length(min=1))
    duration = fields.Integer(allow_none=True, strict=True, validate=validate.Range(min=0))  # minutes


class RecipeSchema(Schema):
    class Meta:
        unknown = RAISE

    id = fields.String(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    description = fields.String(allow_none=True)
    servings = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))
    prep_time = fields.Integer(required=True, strict=True, validate=validate.Range(min=0))
    cook_time = fields.Integer(required=True, strict=True, validate=validate.Range(min=0))
    ingredients = fields.List(fields.Nested(IngredientSchema), required=True)
    steps = fields.List(fields.Nested(StepSchema), required=True)
    categories = fields.List(fields.String(validate=validate.Length(min=1)))
    difficulty = fields.Enum(Difficulty, by_value=True, required=True)
    image_url = fields.Url(allow_none=True)
    rating = fields.Integer(allow_none=True, strict=True, validate=validate.Range(min=1, max=5))
    notes = fields.String(allow_none=True)

    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)

    @validates_schema
    def _unique_step_numbers(self, data, **kwargs):
        numbers = [s["step_number"] for s in data.get("steps") or [] if "step_number" in s]
        if len(numbers) != len(set(numbers)):
            raise ValidationError("step_number values must be unique.", "steps")
