from marshmallow import fields, validate

from models.schemas.common import FormSchema


class CategorySchema(FormSchema):
    name = fields.String(
        required=True,
        validate=validate.Length(min=2, max=30, error="Name must be between {min} and {max} characters"),
        error_messages={"required": "Name is required"},
    )
