from __future__ import annotations

from flask import Blueprint, request, render_template, redirect, url_for

from models import queries
from models.schemas.author import AuthorSchema
from models.schemas.common import load_form
from utils.decorators import admin_password_required
from .forms import form_payload, prefill

bp = Blueprint("authors", __name__)

author_schema = AuthorSchema()


def render_create(errors=None, status=200):
    return render_template(
        "authors.html",
        title="Create authors",
        authors=queries.get_authors(),
        form=request.form,
        errors=errors or [],
    ), status


@bp.get("/createAuthors")
def create_author_form():
    """
    Create-author form and the list of active authors
    ---
    tags: [Authors]
    produces: [text/html]
    responses:
      200: { description: OK }
    """
    return render_create()


@bp.post("/createAuthors")
def create_author():
    """
    Create an author
    ---
    tags: [Authors]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: formData, name: name, type: string, required: true, minLength: 2, maxLength: 50 }
      - { in: formData, name: birth_date, type: string, format: date, required: true }
    responses:
      303: { description: Created, redirect to /createAuthors }
      422: { description: Form re-rendered with field errors }
    """
    data, errors = load_form(author_schema, form_payload())
    if errors:
        return render_create(errors, 422)
    queries.insert_author(data)
    return redirect(url_for("authors.create_author_form"), code=303)


@bp.get("/authors/<author_id>/edit")
def edit_author_form(author_id: str):
    """
    Edit-author form
    ---
    tags: [Authors]
    parameters:
      - { in: path, name: author_id, type: string, required: true }
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    author = queries.get_author_by_id(author_id)
    return render_template(
        "author_edit.html", title="Edit author", author=author, form=prefill(author.to_dict()), errors=[]
    )


@bp.post("/authors/<author_id>/edit")
def edit_author(author_id: str):
    """
    Update an author
    ---
    tags: [Authors]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: author_id, type: string, required: true }
      - { in: formData, name: name, type: string, required: true }
      - { in: formData, name: birth_date, type: string, format: date, required: true }
    responses:
      303: { description: Updated, redirect to /createAuthors }
      404: { description: Not found }
      422: { description: Form re-rendered with field errors }
    """
    data, errors = load_form(author_schema, form_payload())
    if errors:
        author = queries.get_author_by_id(author_id)
        return render_template(
            "author_edit.html", title="Edit author", author=author, form=request.form, errors=errors
        ), 422
    queries.update_author(author_id, data)
    return redirect(url_for("authors.create_author_form"), code=303)


@bp.post("/authors/<author_id>/delete")
@admin_password_required
def delete_author(author_id: str):
    """
    Soft delete an author and every book linked to it (requires the admin password)
    ---
    tags: [Authors]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: author_id, type: string, required: true }
      - { in: formData, name: password, type: string, required: true }
    responses:
      303: { description: Deleted, redirect to / }
      403: { description: Incorrect password }
      404: { description: Not found }
    """
    queries.delete_author(author_id)
    return redirect(url_for("books.index"), code=303)
