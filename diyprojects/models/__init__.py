"""Relational schema for diyprojects."""

from diyprojects.models.associations import project_category
from diyprojects.models.base import metadata
from diyprojects.models.category import category_table
from diyprojects.models.project import material_table, project_table, step_table

__all__ = [
    "category_table",
    "material_table",
    "metadata",
    "project_category",
    "project_table",
    "step_table",
]
