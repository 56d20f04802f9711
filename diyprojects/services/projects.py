"""Project service helpers."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

from diyprojects.dao.project_dao import ProjectDao
from diyprojects.entities import Project
from diyprojects.exceptions import DbError, ProjectNotFoundError

logger = logging.getLogger(__name__)


class ProjectService:
    """Turns repository outcomes into the errors the menu reports."""

    def __init__(self, dao: ProjectDao | None = None, engine: Engine | None = None):
        self.dao = dao or ProjectDao(engine)

    def add_project(self, project: Project) -> Project:
        return self.dao.insert(project)

    def fetch_all_projects(self) -> list[Project]:
        return self.dao.fetch_all()

    def fetch_project_by_id(self, project_id: int) -> Project:
        """Return the full project or raise :class:`ProjectNotFoundError`."""
        project = self.dao.fetch_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def modify_project_details(self, project: Project) -> None:
        if not self.dao.update(project):
            raise DbError(f"Project with ID={project.project_id} does not exist.")
        logger.info("Updated project %s", project.project_id)

    def delete_project(self, project_id: int) -> None:
        if not self.dao.delete(project_id):
            raise DbError(f"Project with ID={project_id} does not exist.")
        logger.info("Deleted project %s", project_id)
