"""Association tables for many-to-many relationships."""

from sqlalchemy import Column, ForeignKey, Table, UniqueConstraint

from diyprojects.models.base import metadata

project_category: Table = Table(
    "project_category",
    metadata,
    Column(
        "project_id",
        ForeignKey("project.project_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "category_id",
        ForeignKey("category.category_id", ondelete="CASCADE"),
        nullable=False,
    ),
    UniqueConstraint("project_id", "category_id", name="uq_project_category"),
)
