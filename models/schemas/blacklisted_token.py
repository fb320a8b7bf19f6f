from marshmallow import RAISE, Schema, fields, validate


class BlacklistedTokenSchema(Schema):
    class Meta:
        unknown = RAISE

    token = fields.String(required=True, validate=validate.Length(min=1))
    expires_at = fields.AwareDateTime(required=True)
