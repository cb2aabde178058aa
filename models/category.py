from sqlalchemy import Column, String, Index

from models.base_model import BaseModel, Base, SoftDeleteMixin


class Category(SoftDeleteMixin, BaseModel, Base):
    __tablename__ = "categories"

    name = Column(String(30), nullable=False)

    __table_args__ = (
        Index("ix_categories_name", "name"),
    )
