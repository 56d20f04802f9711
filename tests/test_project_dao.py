from decimal import Decimal

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine

from diyprojects.dao.project_dao import ProjectDao
from diyprojects.database import DbSession
from diyprojects.entities import Project
from diyprojects.exceptions import (
    DbConnectionError,
    DbError,
    ParameterBindingError,
    TransactionError,
)
from diyprojects.models import material_table, project_table


def _deck() -> Project:
    return Project(
        project_name="Deck",
        estimated_hours=Decimal("12.50"),
        actual_hours=Decimal("0.00"),
        difficulty=3,
        notes="cedar",
    )


@pytest.fixture
def transactions(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Record every commit and rollback issued by a session."""
    calls: list[str] = []
    original_commit = DbSession.commit
    original_rollback = DbSession.rollback

    def commit(self: DbSession) -> None:
        calls.append("commit")
        original_commit(self)

    def rollback(self: DbSession) -> None:
        calls.append("rollback")
        original_rollback(self)

    monkeypatch.setattr(DbSession, "commit", commit)
    monkeypatch.setattr(DbSession, "rollback", rollback)
    return calls


def test_insert_assigns_identity_and_round_trips(dao: ProjectDao) -> None:
    project = _deck()

    returned = dao.insert(project)

    assert returned is project
    assert project.project_id is not None

    fetched = dao.fetch_by_id(project.project_id)
    assert fetched is not None
    assert fetched.project_id == project.project_id
    assert fetched.project_name == "Deck"
    assert fetched.estimated_hours == Decimal("12.50")
    assert fetched.actual_hours == Decimal("0.00")
    assert fetched.difficulty == 3
    assert fetched.notes == "cedar"
    assert fetched.materials == []
    assert fetched.steps == []
    assert fetched.categories == []


def test_insert_binds_null_notes(dao: ProjectDao, engine: Engine) -> None:
    project = _deck()
    project.notes = None

    dao.insert(project)

    with engine.connect() as conn:
        notes = conn.execute(
            select(project_table.c.notes).where(
                project_table.c.project_id == project.project_id
            )
        ).scalar_one()
    assert notes is None


def test_insert_assigns_distinct_identities(dao: ProjectDao) -> None:
    first = dao.insert(_deck())
    second = dao.insert(Project(project_name="Shed"))

    assert first.project_id != second.project_id


def test_insert_rejects_project_with_identity(dao: ProjectDao) -> None:
    project = _deck()
    project.project_id = 42

    with pytest.raises(DbError):
        dao.insert(project)

    assert dao.fetch_all() == []


def test_insert_rolls_back_when_identity_lookup_fails(
    dao: ProjectDao,
    monkeypatch: pytest.MonkeyPatch,
    transactions: list[str],
) -> None:
    def broken_lookup(self: ProjectDao, session: DbSession) -> int:
        raise RuntimeError("identity lookup failed")

    monkeypatch.setattr(ProjectDao, "_fetch_last_insert_id", broken_lookup)
    project = _deck()

    with pytest.raises(DbError) as excinfo:
        dao.insert(project)

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert project.project_id is None
    assert transactions == ["rollback"]

    monkeypatch.undo()
    assert dao.fetch_all() == []


def test_insert_wraps_binding_errors(dao: ProjectDao) -> None:
    project = _deck()
    project.difficulty = "hard"  # type: ignore[assignment]

    with pytest.raises(DbError) as excinfo:
        dao.insert(project)

    assert isinstance(excinfo.value.__cause__, ParameterBindingError)
    assert dao.fetch_all() == []


def test_fetch_all_orders_by_name_without_children(
    dao: ProjectDao, add_children
) -> None:
    for name in ("Shed", "Deck", "Bookshelf"):
        dao.insert(Project(project_name=name, difficulty=2))
    deck_id = next(p.project_id for p in dao.fetch_all() if p.project_name == "Deck")
    add_children(deck_id, materials=["Boards"], steps=["Saw"], categories=["Wood"])

    projects = dao.fetch_all()

    assert [p.project_name for p in projects] == ["Bookshelf", "Deck", "Shed"]
    for project in projects:
        assert project.materials == []
        assert project.steps == []
        assert project.categories == []


def test_fetch_all_commits(dao: ProjectDao, transactions: list[str]) -> None:
    assert dao.fetch_all() == []
    assert transactions == ["commit"]


def test_fetch_by_id_missing_returns_none_and_commits(
    dao: ProjectDao, transactions: list[str]
) -> None:
    assert dao.fetch_by_id(999) is None
    assert transactions == ["commit"]


def test_fetch_by_id_aggregates_children(dao: ProjectDao, add_children) -> None:
    project = dao.insert(_deck())
    other = dao.insert(Project(project_name="Shed"))
    add_children(
        project.project_id,
        materials=["Cedar boards", "Screws"],
        steps=["Lay the boards"],
        categories=["Outdoor", "Carpentry", "Summer"],
    )
    add_children(other.project_id, materials=["Roofing"], categories=["Storage"])

    fetched = dao.fetch_by_id(project.project_id)

    assert fetched is not None
    assert len(fetched.materials) == 2
    assert len(fetched.steps) == 1
    assert len(fetched.categories) == 3
    assert [m.material_name for m in fetched.materials] == ["Cedar boards", "Screws"]
    assert fetched.materials[0].project_id == project.project_id
    assert fetched.materials[0].cost == Decimal("2.50")
    assert fetched.steps[0].step_text == "Lay the boards"
    assert fetched.steps[0].step_order == 1
    assert {c.category_name for c in fetched.categories} == {
        "Outdoor",
        "Carpentry",
        "Summer",
    }


def test_fetch_by_id_rolls_back_when_a_child_query_fails(
    dao: ProjectDao,
    monkeypatch: pytest.MonkeyPatch,
    transactions: list[str],
) -> None:
    project = dao.insert(_deck())
    transactions.clear()

    def broken_steps(self: ProjectDao, session: DbSession, project_id: int):
        raise RuntimeError("steps unavailable")

    monkeypatch.setattr(ProjectDao, "_fetch_steps", broken_steps)

    with pytest.raises(DbError, match="steps unavailable"):
        dao.fetch_by_id(project.project_id)

    assert transactions == ["rollback"]


def test_update_existing_project(dao: ProjectDao, add_children) -> None:
    project = dao.insert(_deck())
    add_children(project.project_id, materials=["Boards"])
    project.project_name = "Cedar deck"
    project.actual_hours = Decimal("14.25")
    project.notes = None

    assert dao.update(project) is True

    fetched = dao.fetch_by_id(project.project_id)
    assert fetched is not None
    assert fetched.project_name == "Cedar deck"
    assert fetched.actual_hours == Decimal("14.25")
    assert fetched.estimated_hours == Decimal("12.50")
    assert fetched.notes is None
    assert [m.material_name for m in fetched.materials] == ["Boards"]


def test_update_missing_project_returns_false_and_commits(
    dao: ProjectDao, transactions: list[str]
) -> None:
    project = _deck()
    project.project_id = 999

    assert dao.update(project) is False
    assert transactions == ["commit"]


def test_delete_existing_project(dao: ProjectDao) -> None:
    project = dao.insert(_deck())

    assert dao.delete(project.project_id) is True
    assert dao.fetch_by_id(project.project_id) is None


def test_delete_missing_project_returns_false(
    dao: ProjectDao, transactions: list[str]
) -> None:
    assert dao.delete(999) is False
    assert transactions == ["commit"]


def test_delete_leaves_cascade_to_schema(
    dao: ProjectDao, engine: Engine, add_children
) -> None:
    # SQLite does not enforce foreign keys unless asked to, so the child rows
    # stay behind; the repository itself only deletes the project row.
    project = dao.insert(_deck())
    add_children(project.project_id, materials=["Boards"])

    assert dao.delete(project.project_id) is True

    with engine.connect() as conn:
        remaining = conn.execute(
            select(func.count()).select_from(material_table)
        ).scalar_one()
    assert remaining == 1


def test_unreachable_store_raises_connection_error(tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'projects.db'}")
    dao = ProjectDao(engine)

    with pytest.raises(DbConnectionError):
        dao.fetch_all()


def test_commit_failure_is_wrapped_and_discards_update(
    dao: ProjectDao, monkeypatch: pytest.MonkeyPatch
) -> None:
    project = dao.insert(_deck())
    project.project_name = "Porch"

    def failing_commit(self: DbSession) -> None:
        raise TransactionError("commit refused")

    monkeypatch.setattr(DbSession, "commit", failing_commit)

    with pytest.raises(DbError, match="commit refused") as excinfo:
        dao.update(project)

    assert type(excinfo.value) is DbError
    assert isinstance(excinfo.value.__cause__, TransactionError)

    monkeypatch.undo()
    fetched = dao.fetch_by_id(project.project_id)
    assert fetched is not None
    assert fetched.project_name == "Deck"


def test_begin_failure_is_wrapped(
    dao: ProjectDao, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_begin(self: DbSession) -> None:
        raise TransactionError("begin refused")

    monkeypatch.setattr(DbSession, "begin", failing_begin)

    with pytest.raises(DbError, match="begin refused") as excinfo:
        dao.fetch_all()

    assert isinstance(excinfo.value.__cause__, TransactionError)
