"""Category table."""

from sqlalchemy import Column, Integer, String, Table

from diyprojects.models.base import metadata

category_table: Table = Table(
    "category",
    metadata,
    Column("category_id", Integer, primary_key=True, autoincrement=True),
    Column("category_name", String(128), nullable=False, unique=True),
)
