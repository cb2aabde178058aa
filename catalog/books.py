from __future__ import annotations

from flask import Blueprint, request, render_template, redirect, url_for

from models import queries
from models.schemas.book import BookSchema
from models.schemas.common import load_form
from utils.decorators import admin_password_required
from .forms import form_payload, prefill

bp = Blueprint("books", __name__)

book_schema = BookSchema()


def reference_lists() -> dict:
    """Everything a book form offers for selection (active rows only)."""
    return {
        "authors": queries.get_authors(),
        "publishers": queries.get_publishers(),
        "categories": queries.get_categories(),
    }


@bp.get("/")
def index():
    """
    List active books
    ---
    tags: [Books]
    produces: [text/html]
    responses:
      200: { description: Books with publisher, authors, categories and release year }
    """
    return render_template("index.html", title="Books list", books=queries.list_books())


@bp.get("/booksList")
def create_book_form():
    """
    Create-book form
    ---
    tags: [Books]
    produces: [text/html]
    responses:
      200: { description: Form with author, publisher and category choices }
    """
    return render_template(
        "books_form.html", title="Create book", form=request.form, errors=[], **reference_lists()
    )


@bp.post("/booksList")
def create_book():
    """
    Create a book
    ---
    tags: [Books]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: formData, name: name, type: string, required: true, maxLength: 100 }
      - { in: formData, name: release_date, type: string, format: date, required: true }
      - { in: formData, name: author_id, type: string, required: true }
      - { in: formData, name: publisher_id, type: string, required: true }
      - in: formData
        name: category_ids
        type: array
        items: { type: string }
        collectionFormat: multi
        required: true
    responses:
      303: { description: Created, redirect to / }
      422: { description: Form re-rendered with field errors }
    """
    data, errors = load_form(book_schema, form_payload(["category_ids"]))
    if errors:
        return render_template(
            "books_form.html", title="Create book", form=request.form, errors=errors, **reference_lists()
        ), 422
    queries.insert_book(data)
    return redirect(url_for("books.index"), code=303)


@bp.get("/<book_id>/edit")
def edit_book_form(book_id: str):
    """
    Edit-book form
    ---
    tags: [Books]
    parameters:
      - { in: path, name: book_id, type: string, required: true }
    responses:
      200: { description: Form pre-filled with the book }
      404: { description: Not found }
    """
    book = queries.get_book_by_id(book_id)
    return render_template(
        "book_edit.html", title="Edit book", book=book, form=prefill(book), errors=[], **reference_lists()
    )


@bp.post("/<book_id>/edit")
def edit_book(book_id: str):
    """
    Replace a book's fields and links
    ---
    tags: [Books]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: book_id, type: string, required: true }
      - { in: formData, name: name, type: string, required: true }
      - { in: formData, name: release_date, type: string, format: date, required: true }
      - { in: formData, name: author_id, type: string, required: true }
      - { in: formData, name: publisher_id, type: string, required: true }
      - in: formData
        name: category_ids
        type: array
        items: { type: string }
        collectionFormat: multi
        required: true
    responses:
      303: { description: Updated, redirect to / }
      404: { description: Not found }
      422: { description: Form re-rendered with field errors }
    """
    data, errors = load_form(book_schema, form_payload(["category_ids"]))
    if errors:
        book = queries.get_book_by_id(book_id)
        return render_template(
            "book_edit.html", title="Edit book", book=book, form=request.form, errors=errors, **reference_lists()
        ), 422
    queries.update_book(book_id, data)
    return redirect(url_for("books.index"), code=303)


@bp.post("/<book_id>/delete")
@admin_password_required
def delete_book(book_id: str):
    """
    Soft delete a book (requires the admin password)
    ---
    tags: [Books]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: book_id, type: string, required: true }
      - { in: formData, name: password, type: string, required: true }
    responses:
      303: { description: Deleted, redirect to / }
      403: { description: Incorrect password }
      404: { description: Not found }
    """
    queries.delete_book(book_id)
    return redirect(url_for("books.index"), code=303)
