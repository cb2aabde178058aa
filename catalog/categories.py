from __future__ import annotations

from flask import Blueprint, request, render_template, redirect, url_for

from models import queries
from models.schemas.category import CategorySchema
from models.schemas.common import load_form
from utils.decorators import admin_password_required
from .forms import form_payload, prefill

bp = Blueprint("categories", __name__)

category_schema = CategorySchema()


def render_create(errors=None, status=200):
    return render_template(
        "categories.html",
        title="Create categories",
        categories=queries.get_categories(),
        form=request.form,
        errors=errors or [],
    ), status


@bp.get("/createCategories")
def create_category_form():
    """
    Create-category form and the list of active categories
    ---
    tags: [Categories]
    produces: [text/html]
    responses:
      200: { description: OK }
    """
    return render_create()


@bp.post("/createCategories")
def create_category():
    """
    Create a category
    ---
    tags: [Categories]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: formData, name: name, type: string, required: true, minLength: 2, maxLength: 30 }
    responses:
      303: { description: Created, redirect to /createCategories }
      422: { description: Form re-rendered with field errors }
    """
    data, errors = load_form(category_schema, form_payload())
    if errors:
        return render_create(errors, 422)
    queries.insert_category(data)
    return redirect(url_for("categories.create_category_form"), code=303)


@bp.get("/categories/<category_id>/edit")
def edit_category_form(category_id: str):
    """
    Edit-category form
    ---
    tags: [Categories]
    parameters:
      - { in: path, name: category_id, type: string, required: true }
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    category = queries.get_category_by_id(category_id)
    return render_template(
        "category_edit.html",
        title="Edit category",
        category=category,
        form=prefill(category.to_dict()),
        errors=[],
    )


@bp.post("/categories/<category_id>/edit")
def edit_category(category_id: str):
    """
    Rename a category
    ---
    tags: [Categories]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: category_id, type: string, required: true }
      - { in: formData, name: name, type: string, required: true }
    responses:
      303: { description: Updated, redirect to /createCategories }
      404: { description: Not found }
      422: { description: Form re-rendered with field errors }
    """
    data, errors = load_form(category_schema, form_payload())
    if errors:
        category = queries.get_category_by_id(category_id)
        return render_template(
            "category_edit.html", title="Edit category", category=category, form=request.form, errors=errors
        ), 422
    queries.update_category(category_id, data)
    return redirect(url_for("categories.create_category_form"), code=303)


@bp.post("/categories/<category_id>/delete")
@admin_password_required
def delete_category(category_id: str):
    """
    Soft delete a category and every book filed under it (requires the admin password)
    ---
    tags: [Categories]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: category_id, type: string, required: true }
      - { in: formData, name: password, type: string, required: true }
    responses:
      303: { description: Deleted, redirect to / }
      403: { description: Incorrect password }
      404: { description: Not found }
    """
    queries.delete_category(category_id)
    return redirect(url_for("books.index"), code=303)
