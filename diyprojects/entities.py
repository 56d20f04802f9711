"""Plain records for projects and the rows they own.

Entities carry no database behaviour. They are filled from result rows by
:mod:`diyprojects.dao.mapping` and written back by the project repository.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal


@dataclass
class Material:
    """A material needed for a project."""

    material_id: int | None = None
    project_id: int | None = None
    material_name: str | None = None
    num_required: int | None = None
    cost: Decimal | None = None

    def __str__(self) -> str:
        return (
            f"ID={self.material_id}, materialName={self.material_name}, "
            f"numRequired={self.num_required}, cost={self.cost}"
        )


@dataclass
class Step:
    """One instruction of a project."""

    step_id: int | None = None
    project_id: int | None = None
    step_text: str | None = None
    step_order: int | None = None

    def __str__(self) -> str:
        return f"ID={self.step_id}, stepText={self.step_text}"


@dataclass
class Category:
    """A label shared between projects."""

    category_id: int | None = None
    category_name: str | None = None

    def __str__(self) -> str:
        return f"ID={self.category_id}, categoryName={self.category_name}"


@dataclass
class Project:
    """A project with its scalar details and, once fetched, its children."""

    project_id: int | None = None
    project_name: str | None = None
    estimated_hours: Decimal | None = None
    actual_hours: Decimal | None = None
    difficulty: int | None = None
    notes: str | None = None
    materials: list[Material] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [
            "",
            f"   ID={self.project_id}",
            f"   projectName={self.project_name}",
            f"   estimatedHours={self.estimated_hours}",
            f"   actualHours={self.actual_hours}",
            f"   difficulty={self.difficulty}",
            f"   notes={self.notes}",
            "",
            "   Materials:",
        ]
        lines.extend(f"      {material}" for material in self.materials)
        lines.append("")
        lines.append("   Steps:")
        lines.extend(f"      {step}" for step in self.steps)
        lines.append("")
        lines.append("   Categories:")
        lines.extend(f"      {category}" for category in self.categories)
        return "\n".join(lines)


@dataclass
class ProjectPatch:
    """Scalar project fields to change; ``None`` keeps the current value."""

    project_name: str | None = None
    estimated_hours: Decimal | None = None
    actual_hours: Decimal | None = None
    difficulty: int | None = None
    notes: str | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.project_name,
                self.estimated_hours,
                self.actual_hours,
                self.difficulty,
                self.notes,
            )
        )

    def apply_to(self, project: Project) -> Project:
        """Return a copy of ``project`` with the patched scalar fields.

        The copy keeps the identity of ``project`` but not its child
        collections, which updates never write.
        """
        return replace(
            project,
            project_name=_pick(self.project_name, project.project_name),
            estimated_hours=_pick(self.estimated_hours, project.estimated_hours),
            actual_hours=_pick(self.actual_hours, project.actual_hours),
            difficulty=_pick(self.difficulty, project.difficulty),
            notes=_pick(self.notes, project.notes),
            materials=[],
            steps=[],
            categories=[],
        )


def _pick(new, current):
    return current if new is None else new
