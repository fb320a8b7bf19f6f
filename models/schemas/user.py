from marshmallow import EXCLUDE, RAISE, Schema, fields, pre_load, validate

from models.user import EMAIL_PATTERN, Role


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class IdentitySchema(Schema):
    """Shape of an identity as submitted by a client (plaintext password).

    Open schema: unknown keys are dropped rather than rejected.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(
        required=True,
        validate=validate.Regexp(EMAIL_PATTERN, error="Not a valid email address."),
    )
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=6, max=1024))
    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    role = fields.Enum(Role, by_value=True, load_default=Role.USER)

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data)
            data["email"] = _norm_email(data["email"])
        return data


class UserLoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data)
            data["email"] = _norm_email(data["email"])
        return data


class UserUpdateSchema(Schema):
    """PATCH body for /users/<email>. Email is immutable."""

    class Meta:
        unknown = RAISE

    name = fields.String(validate=validate.Length(min=1, max=255))
    password = fields.String(load_only=True, validate=validate.Length(min=6, max=1024))
    role = fields.Enum(Role, by_value=True)


class UserOutSchema(Schema):
    id = fields.String()
    email = fields.String()
    name = fields.String()
    role = fields.Enum(Role, by_value=True)
    created_at = fields.DateTime()
