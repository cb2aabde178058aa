from __future__ import annotations

from flask import Blueprint, request, render_template, redirect, url_for

from models import queries
from models.schemas.common import load_form
from models.schemas.publisher import PublisherSchema
from utils.decorators import admin_password_required
from .forms import form_payload, prefill

bp = Blueprint("publishers", __name__)

publisher_schema = PublisherSchema()


def render_create(errors=None, status=200):
    return render_template(
        "publishers.html",
        title="Create publishers",
        publishers=queries.get_publishers(),
        form=request.form,
        errors=errors or [],
    ), status


@bp.get("/createPublishers")
def create_publisher_form():
    """
    Create-publisher form and the list of active publishers
    ---
    tags: [Publishers]
    produces: [text/html]
    responses:
      200: { description: OK }
    """
    return render_create()


@bp.post("/createPublishers")
def create_publisher():
    """
    Create a publisher
    ---
    tags: [Publishers]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: formData, name: name, type: string, required: true, minLength: 2, maxLength: 50 }
      - { in: formData, name: founding_date, type: string, format: date, required: true }
    responses:
      303: { description: Created, redirect to /createPublishers }
      422: { description: Form re-rendered with field errors }
    """
    data, errors = load_form(publisher_schema, form_payload())
    if errors:
        return render_create(errors, 422)
    queries.insert_publisher(data)
    return redirect(url_for("publishers.create_publisher_form"), code=303)


@bp.get("/publishers/<publisher_id>/edit")
def edit_publisher_form(publisher_id: str):
    """
    Edit-publisher form
    ---
    tags: [Publishers]
    parameters:
      - { in: path, name: publisher_id, type: string, required: true }
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    publisher = queries.get_publisher_by_id(publisher_id)
    return render_template(
        "publisher_edit.html",
        title="Edit publisher",
        publisher=publisher,
        form=prefill(publisher.to_dict()),
        errors=[],
    )


@bp.post("/publishers/<publisher_id>/edit")
def edit_publisher(publisher_id: str):
    """
    Update a publisher
    ---
    tags: [Publishers]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: publisher_id, type: string, required: true }
      - { in: formData, name: name, type: string, required: true }
      - { in: formData, name: founding_date, type: string, format: date, required: true }
    responses:
      303: { description: Updated, redirect to /createPublishers }
      404: { description: Not found }
      422: { description: Form re-rendered with field errors }
    """
    data, errors = load_form(publisher_schema, form_payload())
    if errors:
        publisher = queries.get_publisher_by_id(publisher_id)
        return render_template(
            "publisher_edit.html", title="Edit publisher", publisher=publisher, form=request.form, errors=errors
        ), 422
    queries.update_publisher(publisher_id, data)
    return redirect(url_for("publishers.create_publisher_form"), code=303)


@bp.post("/publishers/<publisher_id>/delete")
@admin_password_required
def delete_publisher(publisher_id: str):
    """
    Soft delete a publisher and all of its books (requires the admin password)
    ---
    tags: [Publishers]
    consumes: [application/x-www-form-urlencoded]
    parameters:
      - { in: path, name: publisher_id, type: string, required: true }
      - { in: formData, name: password, type: string, required: true }
    responses:
      303: { description: Deleted, redirect to / }
      403: { description: Incorrect password }
      404: { description: Not found }
    """
    queries.delete_publisher(publisher_id)
    return redirect(url_for("books.index"), code=303)
