"""
Data access for the catalog.

Every function takes already-validated input (see models.schemas) and either
returns rows or raises:
- NotFoundError when a fetch, update or soft delete matches zero rows
- StoreFault wrapping any SQLAlchemy error

Multi-statement writes (a book and its links, a soft-delete cascade) run inside
a single storage.transaction(), so a failure part-way leaves nothing behind.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from models import storage
from models.author import Author
from models.book import Book, books_authors, books_categories
from models.category import Category
from models.publisher import Publisher
from utils.exceptions import NotFoundError, StoreFault

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(action: str, entity: str):
    try:
        yield
    except SQLAlchemyError as exc:
        reason = getattr(exc, "orig", None) or exc
        logger.error("Error %s: %s", action, reason)
        raise StoreFault(f"Error {action}: {reason}", entity=entity) from exc


def _not_found(model) -> NotFoundError:
    return NotFoundError(f"{model.__name__} not found", entity=model.__name__)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def list_books() -> List[Dict]:
    """
    One row per active book with its publisher, distinct author names and
    distinct category names (comma-joined) and the release year.
    Books without an author or category link are left out.
    """
    with _store_errors("fetching books", "Book"):
        session = storage.get_session()
        rows = (
            session.query(
                Book.id.label("book_id"),
                Book.name.label("book_name"),
                Book.release_date,
                Publisher.name.label("publisher_name"),
                Author.name.label("author_name"),
                Category.name.label("category_name"),
            )
            .join(Publisher, Book.publisher_id == Publisher.id)
            .join(books_authors, books_authors.c.book_id == Book.id)
            .join(Author, Author.id == books_authors.c.author_id)
            .join(books_categories, books_categories.c.book_id == Book.id)
            .join(Category, Category.id == books_categories.c.category_id)
            .filter(Book.active_clause())
            .order_by(Book.name, Book.id)
            .all()
        )

    grouped: Dict[str, Dict] = {}
    for row in rows:
        entry = grouped.get(row.book_id)
        if entry is None:
            entry = grouped[row.book_id] = {
                "book_id": row.book_id,
                "book_name": row.book_name,
                "publisher_name": row.publisher_name,
                "release_year": row.release_date.year,
                "authors": set(),
                "categories": set(),
            }
        entry["authors"].add(row.author_name)
        entry["categories"].add(row.category_name)

    books = []
    for entry in grouped.values():
        entry["authors"] = ", ".join(sorted(entry["authors"]))
        entry["categories"] = ", ".join(sorted(entry["categories"]))
        books.append(entry)
    return books


def _active(model, action: str):
    with _store_errors(action, model.__name__):
        session = storage.get_session()
        return session.query(model).filter(model.active_clause()).order_by(model.name).all()


def get_authors() -> List[Author]:
    return _active(Author, "fetching authors")


def get_publishers() -> List[Publisher]:
    return _active(Publisher, "fetching publishers")


def get_categories() -> List[Category]:
    return _active(Category, "fetching categories")


def _by_id(model, entity_id: str):
    # Edit forms must load a row whatever its active state
    with _store_errors(f"fetching {model.__name__.lower()}", model.__name__):
        obj = storage.get(model, entity_id)
    if obj is None:
        raise _not_found(model)
    return obj


def get_author_by_id(author_id: str) -> Author:
    return _by_id(Author, author_id)


def get_publisher_by_id(publisher_id: str) -> Publisher:
    return _by_id(Publisher, publisher_id)


def get_category_by_id(category_id: str) -> Category:
    return _by_id(Category, category_id)


def get_book_by_id(book_id: str) -> Dict:
    """Book columns plus the linked author_id and category_ids."""
    book = _by_id(Book, book_id)
    with _store_errors("fetching book", "Book"):
        session = storage.get_session()
        author_ids = session.scalars(
            select(books_authors.c.author_id).where(books_authors.c.book_id == book.id)
        ).all()
        category_ids = session.scalars(
            select(books_categories.c.category_id).where(books_categories.c.book_id == book.id)
        ).all()
    return {
        "id": book.id,
        "name": book.name,
        "release_date": book.release_date,
        "publisher_id": book.publisher_id,
        "author_id": author_ids[0] if author_ids else None,
        "category_ids": list(category_ids),
        "active": book.active,
    }


# ---------------------------------------------------------------------------
# Inserts / updates
# ---------------------------------------------------------------------------

def _insert(model, data: Dict):
    label = model.__name__.lower()
    with _store_errors(f"inserting {label}", model.__name__), storage.transaction() as session:
        obj = model(**data)
        session.add(obj)
    logger.info("Created %s %s", label, obj.id)
    return obj


def insert_author(data: Dict) -> Author:
    return _insert(Author, {"name": data["name"], "birth_date": data["birth_date"]})


def insert_publisher(data: Dict) -> Publisher:
    return _insert(Publisher, {"name": data["name"], "founding_date": data["founding_date"]})


def insert_category(data: Dict) -> Category:
    return _insert(Category, {"name": data["name"]})


def _update_row(session, model, entity_id: str, values: Dict):
    result = session.execute(update(model).where(model.id == entity_id).values(**values))
    if result.rowcount == 0:
        raise _not_found(model)


def _update(model, entity_id: str, values: Dict):
    label = model.__name__.lower()
    with _store_errors(f"updating {label}", model.__name__), storage.transaction() as session:
        _update_row(session, model, entity_id, values)
    logger.info("Updated %s %s", label, entity_id)


def update_author(author_id: str, data: Dict):
    _update(Author, author_id, {"name": data["name"], "birth_date": data["birth_date"]})


def update_publisher(publisher_id: str, data: Dict):
    _update(Publisher, publisher_id, {"name": data["name"], "founding_date": data["founding_date"]})


def update_category(category_id: str, data: Dict):
    _update(Category, category_id, {"name": data["name"]})


def _link_author(session, book_id: str, author_id: str):
    session.execute(insert(books_authors).values(book_id=book_id, author_id=author_id))


def _link_categories(session, book_id: str, category_ids: List[str]):
    # Single multi-row INSERT for all categories
    session.execute(
        insert(books_categories).values(
            [{"book_id": book_id, "category_id": category_id} for category_id in category_ids]
        )
    )


def insert_book(data: Dict) -> Book:
    """Book row, its author link and its category links, all or nothing."""
    with _store_errors("inserting book", "Book"), storage.transaction() as session:
        book = Book(
            name=data["name"],
            release_date=data["release_date"],
            publisher_id=data["publisher_id"],
        )
        session.add(book)
        session.flush()
        _link_author(session, book.id, data["author_id"])
        _link_categories(session, book.id, data["category_ids"])
    logger.info("Created book %s with %d categories", book.id, len(data["category_ids"]))
    return book


def update_book(book_id: str, data: Dict):
    """Full replace of the book's columns and of its author/category links."""
    with _store_errors("updating book", "Book"), storage.transaction() as session:
        _update_row(
            session,
            Book,
            book_id,
            {
                "name": data["name"],
                "release_date": data["release_date"],
                "publisher_id": data["publisher_id"],
            },
        )
        session.execute(delete(books_authors).where(books_authors.c.book_id == book_id))
        session.execute(delete(books_categories).where(books_categories.c.book_id == book_id))
        _link_author(session, book_id, data["author_id"])
        _link_categories(session, book_id, data["category_ids"])
    logger.info("Updated book %s", book_id)


# ---------------------------------------------------------------------------
# Soft deletes
# ---------------------------------------------------------------------------

def _deactivate_books(session, criterion):
    session.execute(
        update(Book).where(criterion).values(**Book.deactivation_values()),
        execution_options={"synchronize_session": "fetch"},
    )


def _soft_delete(model, entity_id: str, book_criterion=None):
    """
    Dependent books go inactive first, then the row itself; one transaction,
    so a reader never sees an inactive parent with a still-active book.
    """
    label = model.__name__.lower()
    with _store_errors(f"deleting {label}", model.__name__), storage.transaction() as session:
        if book_criterion is not None:
            _deactivate_books(session, book_criterion)
        _update_row(session, model, entity_id, model.deactivation_values())
    logger.info("Soft-deleted %s %s", label, entity_id)


def delete_book(book_id: str):
    _soft_delete(Book, book_id)


def delete_author(author_id: str):
    linked = select(books_authors.c.book_id).where(books_authors.c.author_id == author_id)
    _soft_delete(Author, author_id, Book.id.in_(linked))


def delete_publisher(publisher_id: str):
    _soft_delete(Publisher, publisher_id, Book.publisher_id == publisher_id)


def delete_category(category_id: str):
    linked = select(books_categories.c.book_id).where(books_categories.c.category_id == category_id)
    _soft_delete(Category, category_id, Book.id.in_(linked))
