from marshmallow import RAISE, Schema, fields, validate, validates

from models.item import ItemCategory, StorageLocation, Unit
from models.schemas.common import validate_not_future


class BarcodeSchema(Schema):
    class Meta:
        unknown = RAISE

    code = fields.String(required=True, validate=validate.Length(min=1, max=64))
    store_id = fields.String(allow_none=True)


class ItemSchema(Schema):
    class Meta:
        unknown = RAISE

    id = fields.String(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    category = fields.Enum(ItemCategory, by_value=True, required=True)
    quantity = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))
    unit = fields.Enum(Unit, by_value=True, required=True)
    storage_location = fields.Enum(StorageLocation, by_value=True, required=True)
    price = fields.Float(required=True, validate=validate.Range(min=0))
    barcodes = fields.List(fields.Nested(BarcodeSchema), required=True)
    store_id = fields.String(required=True)
    expiry_date = fields.Date(allow_none=True)
    date_purchased = fields.Date(allow_none=True)

    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)

    @validates("date_purchased")
    def _validate_date_purchased(self, value, **kwargs):
        validate_not_future(value)
