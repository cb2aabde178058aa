from marshmallow import fields, validate, post_load

from models.schemas.common import FormSchema, required_date


class BookSchema(FormSchema):
    """Create and edit form for a book: one author, one publisher, 1+ categories."""

    name = fields.String(
        required=True,
        validate=validate.Length(min=1, max=100, error="Title must be between {min} and {max} characters"),
        error_messages={"required": "Title is required"},
    )
    author_id = fields.String(required=True, error_messages={"required": "You must select an author"})
    publisher_id = fields.String(required=True, error_messages={"required": "You must select a publisher"})
    release_date = required_date("Release date is required")
    category_ids = fields.List(
        fields.String(),
        required=True,
        validate=validate.Length(min=1, error="You must select at least one category"),
        error_messages={"required": "You must select at least one category"},
    )

    @post_load
    def _dedupe_categories(self, data, **kwargs):
        # A repeated id would violate the books_categories primary key
        data["category_ids"] = list(dict.fromkeys(data["category_ids"]))
        return data
