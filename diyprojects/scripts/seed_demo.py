"""Seed demo data for development."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import bindparam, insert, select
from sqlalchemy.engine import Engine

from diyprojects.dao.binding import PreparedStatement, ScalarKind
from diyprojects.database import DbSession, session_scope
from diyprojects.models import (
    category_table,
    material_table,
    project_category,
    project_table,
    step_table,
)

logger = logging.getLogger(__name__)

DEMO_PROJECTS: list[dict[str, Any]] = [
    {
        "project_name": "Hang a door",
        "estimated_hours": Decimal("4.00"),
        "actual_hours": Decimal("3.50"),
        "difficulty": 3,
        "notes": "Use the door hangers from the hardware store",
        "materials": [
            ("Door in frame", 1, Decimal("99.99")),
            ("Package of door hangers", 1, Decimal("5.49")),
            ("2-inch screws", 20, Decimal("0.15")),
        ],
        "steps": [
            "Align hangers on opening side of door vertically on the wall",
            "Screw hangers into frame",
            "Check that the door swings freely",
        ],
        "categories": ["Doors and Windows", "Repairs"],
    },
    {
        "project_name": "Build a cedar deck",
        "estimated_hours": Decimal("40.00"),
        "actual_hours": Decimal("0.00"),
        "difficulty": 4,
        "notes": "Check local permit requirements first",
        "materials": [
            ("Cedar decking boards", 60, Decimal("18.75")),
            ("Joist hangers", 24, Decimal("1.89")),
        ],
        "steps": [
            "Set the footings",
            "Install beams and joists",
            "Lay the decking",
        ],
        "categories": ["Outdoor", "Carpentry"],
    },
    {
        "project_name": "Paint the kitchen",
        "estimated_hours": Decimal("8.00"),
        "actual_hours": Decimal("0.00"),
        "difficulty": 2,
        "notes": None,
        "materials": [("Gallon of paint", 2, Decimal("34.98"))],
        "steps": ["Tape the trim", "Apply two coats"],
        "categories": ["Interior"],
    },
]


def _insert(session: DbSession, table, values: dict[str, tuple[object, ScalarKind]]):
    names = list(values)
    statement = PreparedStatement(
        insert(table).values(
            {name: bindparam(f"p_{name}", type_=table.c[name].type) for name in names}
        ),
        [f"p_{name}" for name in names],
    )
    for position, name in enumerate(names, start=1):
        value, kind = values[name]
        statement.bind(position, value, kind)
    session.execute_update(statement)
    return session.last_insert_id()


def _lookup(session: DbSession, column, value: str) -> int | None:
    statement = PreparedStatement(
        select(column.table).where(column == bindparam("p_value", type_=column.type)),
        ["p_value"],
    )
    statement.bind(1, value, ScalarKind.TEXT)
    rows = session.query(statement)
    return rows[0][0] if rows else None


def _ensure_category(session: DbSession, name: str) -> int:
    category_id = _lookup(session, category_table.c.category_name, name)
    if category_id is None:
        category_id = _insert(
            session, category_table, {"category_name": (name, ScalarKind.TEXT)}
        )
    return category_id


def seed_demo_data(engine: Engine | None = None) -> int:
    """Insert the demo projects that do not exist yet; return how many."""
    created = 0
    with session_scope(engine) as session:
        for data in DEMO_PROJECTS:
            if _lookup(session, project_table.c.project_name, data["project_name"]):
                logger.info("Demo project %r already exists", data["project_name"])
                continue

            project_id = _insert(
                session,
                project_table,
                {
                    "project_name": (data["project_name"], ScalarKind.TEXT),
                    "estimated_hours": (data["estimated_hours"], ScalarKind.DECIMAL),
                    "actual_hours": (data["actual_hours"], ScalarKind.DECIMAL),
                    "difficulty": (data["difficulty"], ScalarKind.INTEGER),
                    "notes": (data["notes"], ScalarKind.TEXT),
                },
            )
            for name, num_required, cost in data["materials"]:
                _insert(
                    session,
                    material_table,
                    {
                        "project_id": (project_id, ScalarKind.INTEGER),
                        "material_name": (name, ScalarKind.TEXT),
                        "num_required": (num_required, ScalarKind.INTEGER),
                        "cost": (cost, ScalarKind.DECIMAL),
                    },
                )
            for order, text in enumerate(data["steps"], start=1):
                _insert(
                    session,
                    step_table,
                    {
                        "project_id": (project_id, ScalarKind.INTEGER),
                        "step_text": (text, ScalarKind.TEXT),
                        "step_order": (order, ScalarKind.INTEGER),
                    },
                )
            for name in data["categories"]:
                category_id = _ensure_category(session, name)
                link = PreparedStatement(
                    insert(project_category).values(
                        project_id=bindparam("p_project_id"),
                        category_id=bindparam("p_category_id"),
                    ),
                    ["p_project_id", "p_category_id"],
                )
                link.bind(1, project_id, ScalarKind.INTEGER)
                link.bind(2, category_id, ScalarKind.INTEGER)
                session.execute_update(link)

            logger.info("Created demo project %r", data["project_name"])
            created += 1
    return created
