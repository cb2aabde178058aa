from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    Table,
    Date,
    CheckConstraint,
    Index,
)

from models.base_model import BaseModel, Base, SoftDeleteMixin

# Association tables, read and written through Core statements in models.queries.
# ON DELETE CASCADE only fires on a hard delete, which the catalog never issues;
# a soft delete leaves the links in place as history.
books_authors = Table(
    "books_authors",
    Base.metadata,
    Column("book_id", String(36), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("author_id", String(36), ForeignKey("authors.id", ondelete="CASCADE"), primary_key=True),
)

books_categories = Table(
    "books_categories",
    Base.metadata,
    Column("book_id", String(36), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", String(36), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Book(SoftDeleteMixin, BaseModel, Base):
    __tablename__ = "books"

    name = Column(String(100), nullable=False)
    release_date = Column(Date, nullable=False)

    # Publisher: RESTRICT hard deletion while books reference it
    publisher_id = Column(String(36), ForeignKey("publishers.id", ondelete="RESTRICT"), nullable=False)

    __table_args__ = (
        CheckConstraint("length(name) >= 1", name="ck_books_name_not_empty"),
        Index("ix_books_name", "name"),
        Index("ix_books_publisher_id", "publisher_id"),
    )
