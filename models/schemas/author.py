from marshmallow import fields, validate

from models.schemas.common import FormSchema, required_date


class AuthorSchema(FormSchema):
    name = fields.String(
        required=True,
        validate=validate.Length(min=2, max=50, error="Name must be between {min} and {max} characters"),
        error_messages={"required": "Name is required"},
    )
    birth_date = required_date("Birth date is required")
