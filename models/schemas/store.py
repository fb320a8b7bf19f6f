from marshmallow import RAISE, Schema, fields, validate


class StoreSchema(Schema):
    class Meta:
        unknown = RAISE

    id = fields.String(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    location = fields.String(required=True, validate=validate.Length(min=1, max=255))
    contact_number = fields.String(allow_none=True, validate=validate.Length(max=64))
    website = fields.String(allow_none=True, validate=validate.Length(max=512))

    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
