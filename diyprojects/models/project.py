"""Project and owned child tables."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Table, Text

from diyprojects.models.base import metadata

# Hours and costs are stored with two fractional digits.
HOURS = Numeric(7, 2)

project_table: Table = Table(
    "project",
    metadata,
    Column("project_id", Integer, primary_key=True, autoincrement=True),
    Column("project_name", String(128), nullable=False),
    Column("estimated_hours", HOURS),
    Column("actual_hours", HOURS),
    Column("difficulty", Integer),
    Column("notes", Text),
)

material_table: Table = Table(
    "material",
    metadata,
    Column("material_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "project_id",
        ForeignKey("project.project_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("material_name", String(128), nullable=False),
    Column("num_required", Integer),
    Column("cost", Numeric(7, 2)),
)

step_table: Table = Table(
    "step",
    metadata,
    Column("step_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "project_id",
        ForeignKey("project.project_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("step_text", Text, nullable=False),
    Column("step_order", Integer, nullable=False),
)
