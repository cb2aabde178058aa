"""
Pytest configuration and fixtures.

Each test gets its own app bound to a fresh SQLite file, plus helpers that
seed publishers, authors, categories and books through the data-access layer.
"""
from datetime import date

import pytest

from catalog import create_app
from models import queries, storage

ADMIN_PASSWORD = "s3cret-admin"


@pytest.fixture
def app(tmp_path):
    app = create_app(
        "testing",
        {
            "DATABASE_URL": f"sqlite:///{tmp_path / 'catalog.db'}",
            "ADMIN_PASSWORD": ADMIN_PASSWORD,
        },
    )
    yield app
    storage.close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def publisher(app):
    return queries.insert_publisher({"name": "Planeta", "founding_date": date(1990, 1, 1)})


@pytest.fixture
def author(app):
    return queries.insert_author({"name": "A. Rivas", "birth_date": date(1975, 5, 2)})


@pytest.fixture
def category(app):
    return queries.insert_category({"name": "Fiction"})


@pytest.fixture
def make_book(publisher, author, category):
    """Factory: insert a book, defaulting every reference to the seeded rows."""

    def _make_book(name="The Long Road", release_date=date(2020, 3, 1), **overrides):
        data = {
            "name": name,
            "release_date": release_date,
            "publisher_id": publisher.id,
            "author_id": author.id,
            "category_ids": [category.id],
        }
        data.update(overrides)
        return queries.insert_book(data)

    return _make_book


@pytest.fixture
def book(make_book):
    return make_book()
