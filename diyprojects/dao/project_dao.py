"""Project repository.

Every public method runs in its own session and transaction: it begins,
issues its statements, and commits, or rolls back and raises
:class:`~diyprojects.exceptions.DbError` when anything in between fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import Table, bindparam, delete, insert, select, update
from sqlalchemy.engine import Engine

from diyprojects.dao.binding import PreparedStatement, ScalarKind
from diyprojects.dao.mapping import (
    CATEGORY_SHAPE,
    MATERIAL_SHAPE,
    PROJECT_SHAPE,
    STEP_SHAPE,
    EntityShape,
    extract,
)
from diyprojects.database import DbSession, open_session
from diyprojects.entities import Category, Material, Project, Step
from diyprojects.exceptions import DbError
from diyprojects.models import (
    category_table,
    material_table,
    project_category,
    project_table,
    step_table,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
EntityT = TypeVar("EntityT")

# Scalar fields written by insert and update, in placeholder order.
_PROJECT_FIELDS: tuple[tuple[str, ScalarKind], ...] = (
    ("project_name", ScalarKind.TEXT),
    ("estimated_hours", ScalarKind.DECIMAL),
    ("actual_hours", ScalarKind.DECIMAL),
    ("difficulty", ScalarKind.INTEGER),
    ("notes", ScalarKind.TEXT),
)


def _param(table: Table, column: str):
    return bindparam(f"p_{column}", type_=table.c[column].type)


def _project_values() -> dict[str, object]:
    return {name: _param(project_table, name) for name, _kind in _PROJECT_FIELDS}


def _field_names() -> list[str]:
    return [f"p_{name}" for name, _kind in _PROJECT_FIELDS]


def _bind_fields(statement: PreparedStatement, project: Project) -> None:
    for position, (name, kind) in enumerate(_PROJECT_FIELDS, start=1):
        statement.bind(position, getattr(project, name), kind)


def _by_project_id(table: Table) -> PreparedStatement:
    return PreparedStatement(
        select(table).where(table.c.project_id == _param(table, "project_id")),
        ["p_project_id"],
    )


class ProjectDao:
    """Reads and writes projects and assembles project aggregates."""

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    def _run(self, action: str, work: Callable[[DbSession], T]) -> T:
        with open_session(self._engine) as session:
            try:
                session.begin()
                try:
                    outcome = work(session)
                except Exception as exc:
                    logger.warning("Rolling back %s: %s", action, exc)
                    session.rollback()
                    raise
                session.commit()
            except Exception as exc:
                raise DbError(f"Failed to {action}: {exc}") from exc
            return outcome

    def insert(self, project: Project) -> Project:
        """Insert the scalar fields of ``project`` and set its new identity."""
        if project.project_id is not None:
            raise DbError(
                f"Project already has identity {project.project_id}; "
                "insert assigns a new one"
            )

        def work(session: DbSession) -> int:
            statement = PreparedStatement(
                insert(project_table).values(_project_values()), _field_names()
            )
            _bind_fields(statement, project)
            session.execute_update(statement)
            return self._fetch_last_insert_id(session)

        project.project_id = self._run("insert project", work)
        logger.debug("Inserted project %s", project.project_id)
        return project

    def _fetch_last_insert_id(self, session: DbSession) -> int:
        return session.last_insert_id()

    def fetch_all(self) -> list[Project]:
        """Return every project ordered by name, without child collections."""

        def work(session: DbSession) -> list[Project]:
            statement = PreparedStatement(
                select(project_table).order_by(project_table.c.project_name), []
            )
            return [extract(row, PROJECT_SHAPE) for row in session.query(statement)]

        return self._run("fetch projects", work)

    def fetch_by_id(self, project_id: int) -> Project | None:
        """Return the project with its materials, steps and categories.

        A missing project yields ``None``; the transaction still commits.
        """

        def work(session: DbSession) -> Project | None:
            statement = _by_project_id(project_table)
            statement.bind(1, project_id, ScalarKind.INTEGER)
            rows = session.query(statement)
            if not rows:
                return None

            project = extract(rows[0], PROJECT_SHAPE)
            project.materials.extend(self._fetch_materials(session, project_id))
            project.steps.extend(self._fetch_steps(session, project_id))
            project.categories.extend(self._fetch_categories(session, project_id))
            return project

        project = self._run(f"fetch project {project_id}", work)
        if project is None:
            logger.debug("Project %s not found", project_id)
        return project

    def _fetch_materials(self, session: DbSession, project_id: int) -> list[Material]:
        return self._fetch_children(
            session, _by_project_id(material_table), project_id, MATERIAL_SHAPE
        )

    def _fetch_steps(self, session: DbSession, project_id: int) -> list[Step]:
        return self._fetch_children(
            session, _by_project_id(step_table), project_id, STEP_SHAPE
        )

    def _fetch_categories(self, session: DbSession, project_id: int) -> list[Category]:
        statement = PreparedStatement(
            select(category_table)
            .select_from(category_table.join(project_category))
            .where(
                project_category.c.project_id
                == _param(project_category, "project_id")
            ),
            ["p_project_id"],
        )
        return self._fetch_children(session, statement, project_id, CATEGORY_SHAPE)

    @staticmethod
    def _fetch_children(
        session: DbSession,
        statement: PreparedStatement,
        project_id: int,
        shape: EntityShape[EntityT],
    ) -> list[EntityT]:
        statement.bind(1, project_id, ScalarKind.INTEGER)
        return [extract(row, shape) for row in session.query(statement)]

    def update(self, project: Project) -> bool:
        """Replace the scalar fields of an existing project.

        Returns ``True`` when exactly one row changed. Child collections are
        never written.
        """

        def work(session: DbSession) -> int:
            statement = PreparedStatement(
                update(project_table)
                .where(
                    project_table.c.project_id
                    == _param(project_table, "project_id")
                )
                .values(_project_values()),
                [*_field_names(), "p_project_id"],
            )
            _bind_fields(statement, project)
            statement.bind(
                len(_PROJECT_FIELDS) + 1, project.project_id, ScalarKind.INTEGER
            )
            return session.execute_update(statement)

        updated = self._run(f"update project {project.project_id}", work) == 1
        logger.debug("Update of project %s applied: %s", project.project_id, updated)
        return updated

    def delete(self, project_id: int) -> bool:
        """Delete a project row. Returns ``True`` when exactly one row went."""

        def work(session: DbSession) -> int:
            statement = PreparedStatement(
                delete(project_table).where(
                    project_table.c.project_id
                    == _param(project_table, "project_id")
                ),
                ["p_project_id"],
            )
            statement.bind(1, project_id, ScalarKind.INTEGER)
            return session.execute_update(statement)

        deleted = self._run(f"delete project {project_id}", work) == 1
        logger.debug("Delete of project %s applied: %s", project_id, deleted)
        return deleted
