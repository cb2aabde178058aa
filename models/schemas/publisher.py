from marshmallow import fields, validate

from models.schemas.common import FormSchema, required_date


class PublisherSchema(FormSchema):
    name = fields.String(
        required=True,
        validate=validate.Length(min=2, max=50, error="Name must be between {min} and {max} characters"),
        error_messages={"required": "Name is required"},
    )
    founding_date = required_date("Founding date is required")
