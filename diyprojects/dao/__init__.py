"""Data-access helpers and the project repository.

The repository lives in :mod:`diyprojects.dao.project_dao`; it is not
re-exported here because it depends on :mod:`diyprojects.database`, which
itself uses the binding helpers.
"""

from diyprojects.dao.binding import PreparedStatement, ScalarKind, bind
from diyprojects.dao.mapping import (
    CATEGORY_SHAPE,
    MATERIAL_SHAPE,
    PROJECT_SHAPE,
    STEP_SHAPE,
    EntityShape,
    extract,
)

__all__ = [
    "CATEGORY_SHAPE",
    "MATERIAL_SHAPE",
    "PROJECT_SHAPE",
    "STEP_SHAPE",
    "EntityShape",
    "PreparedStatement",
    "ScalarKind",
    "bind",
    "extract",
]
