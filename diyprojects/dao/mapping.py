"""Explicit row-to-entity decoders."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy.engine import Row

from diyprojects.entities import Category, Material, Project, Step
from diyprojects.exceptions import RowMappingError

EntityT = TypeVar("EntityT")


@dataclass(frozen=True)
class EntityShape(Generic[EntityT]):
    """How result columns map onto one entity type.

    ``columns`` maps a lower-case column name to the entity attribute it
    fills. ``identity`` names the column every row must carry.
    """

    factory: Callable[[], EntityT]
    identity: str
    columns: dict[str, str]


PROJECT_SHAPE: EntityShape[Project] = EntityShape(
    factory=Project,
    identity="project_id",
    columns={
        "project_id": "project_id",
        "project_name": "project_name",
        "estimated_hours": "estimated_hours",
        "actual_hours": "actual_hours",
        "difficulty": "difficulty",
        "notes": "notes",
    },
)

MATERIAL_SHAPE: EntityShape[Material] = EntityShape(
    factory=Material,
    identity="material_id",
    columns={
        "material_id": "material_id",
        "project_id": "project_id",
        "material_name": "material_name",
        "num_required": "num_required",
        "cost": "cost",
    },
)

STEP_SHAPE: EntityShape[Step] = EntityShape(
    factory=Step,
    identity="step_id",
    columns={
        "step_id": "step_id",
        "project_id": "project_id",
        "step_text": "step_text",
        "step_order": "step_order",
    },
)

CATEGORY_SHAPE: EntityShape[Category] = EntityShape(
    factory=Category,
    identity="category_id",
    columns={
        "category_id": "category_id",
        "category_name": "category_name",
    },
)


def extract(row: Row[Any], shape: EntityShape[EntityT]) -> EntityT:
    """Build an entity from ``row``.

    Column names are matched case-insensitively. Columns the shape does not
    know are ignored and fields without a column keep their defaults.
    """
    values = {str(key).lower(): value for key, value in row._mapping.items()}
    if shape.identity not in values:
        raise RowMappingError(
            f"Row has no {shape.identity} column (columns: {sorted(values)})"
        )

    entity = shape.factory()
    for column, attribute in shape.columns.items():
        if column in values:
            setattr(entity, attribute, values[column])
    return entity
