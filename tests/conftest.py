from collections.abc import Callable, Iterator, Sequence
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, insert
from sqlalchemy.engine import Engine

from diyprojects.dao.project_dao import ProjectDao
from diyprojects.database import init_db
from diyprojects.models import (
    category_table,
    material_table,
    project_category,
    step_table,
)

AddChildren = Callable[..., None]


@pytest.fixture
def engine(tmp_path) -> Iterator[Engine]:
    engine = create_engine(f"sqlite:///{tmp_path / 'projects.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def dao(engine: Engine) -> ProjectDao:
    return ProjectDao(engine)


@pytest.fixture
def add_children(engine: Engine) -> AddChildren:
    """Insert materials, steps and categories for a project directly."""

    def _add(
        project_id: int,
        *,
        materials: Sequence[str] = (),
        steps: Sequence[str] = (),
        categories: Sequence[str] = (),
    ) -> None:
        with engine.begin() as conn:
            for name in materials:
                conn.execute(
                    insert(material_table).values(
                        project_id=project_id,
                        material_name=name,
                        num_required=1,
                        cost=Decimal("2.50"),
                    )
                )
            for order, text in enumerate(steps, start=1):
                conn.execute(
                    insert(step_table).values(
                        project_id=project_id, step_text=text, step_order=order
                    )
                )
            for name in categories:
                result = conn.execute(
                    insert(category_table).values(category_name=name)
                )
                conn.execute(
                    insert(project_category).values(
                        project_id=project_id,
                        category_id=result.inserted_primary_key[0],
                    )
                )

    return _add
