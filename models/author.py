from sqlalchemy import Column, String, Date, Index

from models.base_model import BaseModel, Base, SoftDeleteMixin


class Author(SoftDeleteMixin, BaseModel, Base):
    __tablename__ = "authors"

    name = Column(String(50), nullable=False)  # not unique; names can collide
    birth_date = Column(Date, nullable=False)

    __table_args__ = (
        Index("ix_authors_name", "name"),
    )
