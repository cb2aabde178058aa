"""
Tests for the request handlers: form rendering, validation re-renders,
redirects after writes and the password-guarded deletes.
"""
from datetime import date

from models import queries, storage
from models.author import Author
from models.book import Book
from tests.conftest import ADMIN_PASSWORD


class TestExampleScenario:
    def test_create_everything_through_forms(self, client):
        resp = client.post("/createPublishers", data={"name": "Planeta", "founding_date": "1990-01-01"})
        assert resp.status_code == 303
        assert resp.headers["Location"].endswith("/createPublishers")

        resp = client.post("/createAuthors", data={"name": "A. Rivas", "birth_date": "1975-05-02"})
        assert resp.status_code == 303
        assert resp.headers["Location"].endswith("/createAuthors")

        resp = client.post("/createCategories", data={"name": "Fiction"})
        assert resp.status_code == 303
        assert resp.headers["Location"].endswith("/createCategories")

        publisher = queries.get_publishers()[0]
        author = queries.get_authors()[0]
        category = queries.get_categories()[0]

        resp = client.post(
            "/booksList",
            data={
                "name": "The Long Road",
                "release_date": "2020-03-01",
                "publisher_id": publisher.id,
                "author_id": author.id,
                "category_ids": [category.id],
            },
        )
        assert resp.status_code == 303
        assert resp.headers["Location"].endswith("/")

        resp = client.get("/")
        assert resp.status_code == 200
        for text in (b"The Long Road", b"Planeta", b"A. Rivas", b"Fiction", b"2020"):
            assert text in resp.data

        [row] = queries.list_books()
        assert {k: v for k, v in row.items() if k != "book_id"} == {
            "book_name": "The Long Road",
            "publisher_name": "Planeta",
            "authors": "A. Rivas",
            "categories": "Fiction",
            "release_year": 2020,
        }


class TestCreateForms:
    def test_empty_index(self, client):
        resp = client.get("/")

        assert resp.status_code == 200
        assert b"No books yet" in resp.data

    def test_invalid_author_is_rerendered_and_not_written(self, client):
        resp = client.post("/createAuthors", data={"name": "A", "birth_date": "1975-05-02"})

        assert resp.status_code == 422
        assert b"Name must be between 2 and 50 characters" in resp.data
        assert b'value="1975-05-02"' in resp.data
        assert storage.count(Author) == 0

    def test_book_form_lists_reference_data(self, client, publisher, author, category):
        resp = client.get("/booksList")

        assert resp.status_code == 200
        for text in (b"Planeta", b"A. Rivas", b"Fiction"):
            assert text in resp.data

    def test_invalid_book_keeps_reference_lists_and_input(self, client, publisher, author, category):
        resp = client.post(
            "/booksList",
            data={"name": "Half Done", "release_date": "not-a-date", "author_id": author.id},
        )

        assert resp.status_code == 422
        assert b"Date is not valid" in resp.data
        assert b"You must select a publisher" in resp.data
        assert b"You must select at least one category" in resp.data
        assert b'value="Half Done"' in resp.data
        for text in (b"Planeta", b"A. Rivas", b"Fiction"):
            assert text in resp.data
        assert storage.count(Book) == 0

    def test_unknown_publisher_is_a_server_error(self, client, author, category):
        resp = client.post(
            "/booksList",
            data={
                "name": "Lost",
                "release_date": "2020-03-01",
                "publisher_id": "missing",
                "author_id": author.id,
                "category_ids": [category.id],
            },
        )

        assert resp.status_code == 500
        assert b"Error inserting book" in resp.data
        assert storage.count(Book) == 0


class TestEditForms:
    def test_edit_book_form_is_prefilled(self, client, book):
        resp = client.get(f"/{book.id}/edit")

        assert resp.status_code == 200
        assert b'value="The Long Road"' in resp.data
        assert b'value="2020-03-01"' in resp.data

    def test_edit_unknown_book_is_not_found(self, client, app):
        resp = client.get("/missing/edit")

        assert resp.status_code == 404
        assert b"Book not found" in resp.data

    def test_edit_book(self, client, book, publisher, author, category):
        resp = client.post(
            f"/{book.id}/edit",
            data={
                "name": "The Long Road Home",
                "release_date": "2022-01-15",
                "publisher_id": publisher.id,
                "author_id": author.id,
                "category_ids": [category.id],
            },
        )

        assert resp.status_code == 303
        assert queries.list_books()[0]["book_name"] == "The Long Road Home"

    def test_edit_book_validation_error(self, client, book):
        resp = client.post(f"/{book.id}/edit", data={"name": ""})

        assert resp.status_code == 422
        assert b"Title is required" in resp.data
        assert queries.get_book_by_id(book.id)["name"] == "The Long Road"

    def test_edit_author(self, client, author):
        resp = client.post(
            f"/authors/{author.id}/edit", data={"name": "Ana Rivas", "birth_date": "1975-05-02"}
        )

        assert resp.status_code == 303
        assert resp.headers["Location"].endswith("/createAuthors")
        assert queries.get_author_by_id(author.id).name == "Ana Rivas"

    def test_deleted_category_can_still_be_edited(self, client, category):
        queries.delete_category(category.id)

        resp = client.get(f"/categories/{category.id}/edit")

        assert resp.status_code == 200
        assert b"This category has been deleted" in resp.data

    def test_edit_unknown_publisher_post(self, client, app):
        resp = client.post(
            "/publishers/missing/edit", data={"name": "Planeta", "founding_date": "1990-01-01"}
        )

        assert resp.status_code == 404


class TestDeletes:
    def test_wrong_password_is_forbidden_and_changes_nothing(self, client, book, author):
        for path in (f"/{book.id}/delete", f"/authors/{author.id}/delete"):
            resp = client.post(path, data={"password": "wrong"})

            assert resp.status_code == 403
            assert resp.get_json() == {"error": "Incorrect password"}

        assert queries.get_book_by_id(book.id)["active"] is True
        assert queries.get_author_by_id(author.id).active is True

    def test_wrong_password_on_cascading_deletes_changes_nothing(self, client, book, publisher, category):
        for path in (f"/publishers/{publisher.id}/delete", f"/categories/{category.id}/delete"):
            resp = client.post(path, data={"password": "wrong"})

            assert resp.status_code == 403
            assert resp.get_json() == {"error": "Incorrect password"}

        assert queries.get_publisher_by_id(publisher.id).active is True
        assert queries.get_category_by_id(category.id).active is True
        assert queries.get_book_by_id(book.id)["active"] is True
        assert [row["book_id"] for row in queries.list_books()] == [book.id]

    def test_missing_password_is_forbidden(self, client, publisher):
        resp = client.post(f"/publishers/{publisher.id}/delete")

        assert resp.status_code == 403
        assert queries.get_publisher_by_id(publisher.id).active is True

    def test_delete_book(self, client, book):
        resp = client.post(f"/{book.id}/delete", data={"password": ADMIN_PASSWORD})

        assert resp.status_code == 303
        assert resp.headers["Location"].endswith("/")
        assert queries.list_books() == []

    def test_delete_publisher_cascades(self, client, book, publisher):
        resp = client.post(f"/publishers/{publisher.id}/delete", data={"password": ADMIN_PASSWORD})

        assert resp.status_code == 303
        assert b"The Long Road" not in client.get("/").data
        assert queries.get_publisher_by_id(publisher.id).active is False

    def test_delete_category_cascades(self, client, book, category):
        resp = client.post(f"/categories/{category.id}/delete", data={"password": ADMIN_PASSWORD})

        assert resp.status_code == 303
        assert queries.get_book_by_id(book.id)["active"] is False

    def test_json_password_is_accepted(self, client, make_book, author):
        book = make_book()
        other = queries.insert_author({"name": "Zoe", "birth_date": date(1960, 1, 1)})

        resp = client.post(f"/authors/{other.id}/delete", json={"password": ADMIN_PASSWORD})

        assert resp.status_code == 303
        assert queries.get_book_by_id(book.id)["active"] is True
        assert queries.get_author_by_id(other.id).active is False

    def test_delete_unknown_category_is_not_found(self, client, app):
        resp = client.post("/categories/missing/delete", data={"password": ADMIN_PASSWORD})

        assert resp.status_code == 404


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.get_json() == {"status": "ok", "database": "ok", "version": "1.0.0"}
