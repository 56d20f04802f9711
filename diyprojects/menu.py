"""Interactive numbered menu for managing projects."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from diyprojects.entities import Project, ProjectPatch
from diyprojects.exceptions import DbError, InvalidInputError
from diyprojects.services.projects import ProjectService

logger = logging.getLogger(__name__)

# Largest value the Numeric(7, 2) hour and cost columns hold.
MAX_DECIMAL = Decimal("99999.99")

OPERATIONS = (
    "1) Add a project",
    "2) List projects",
    "3) Select a project",
    "4) Update project details",
    "5) Delete a project",
)


def parse_int(raw: str | None) -> int | None:
    """Parse an integer answer; blank answers are ``None``."""
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidInputError(f"{raw} is not a valid number.") from exc


def parse_decimal(raw: str | None) -> Decimal | None:
    """Parse a decimal answer with at most two fractional digits."""
    if raw is None:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise InvalidInputError(f"{raw} is not a valid decimal number.") from exc
    if not value.is_finite():
        raise InvalidInputError(f"{raw} is not a valid decimal number.")
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and exponent < -2:
        raise InvalidInputError(f"{raw} has more than two decimal places.")
    try:
        value = value.quantize(Decimal("0.01"))
    except InvalidOperation as exc:
        raise InvalidInputError(f"{raw} is not a valid decimal number.") from exc
    if abs(value) > MAX_DECIMAL:
        raise InvalidInputError(f"{raw} is larger than {MAX_DECIMAL}.")
    return value


class ProjectsApp:
    """Menu loop holding the currently selected project."""

    def __init__(self, service: ProjectService | None = None) -> None:
        self.service = service or ProjectService()
        self.current_project: Project | None = None

    def run(self) -> None:
        done = False
        while not done:
            try:
                selection = self.get_user_selection()
                if selection == -1:
                    done = self.exit_menu()
                elif selection == 1:
                    self.create_project()
                elif selection == 2:
                    self.list_projects()
                elif selection == 3:
                    self.select_project()
                elif selection == 4:
                    self.update_project_details()
                elif selection == 5:
                    self.delete_project()
                else:
                    print(f"\n{selection} is not a valid selection. Try again.")
            except (DbError, InvalidInputError) as exc:
                logger.debug("Menu operation failed", exc_info=True)
                print(f"\nError: {exc} Try again.")

    def create_project(self) -> None:
        project = Project(
            project_name=self.get_string_input("Enter the project name"),
            estimated_hours=self.get_decimal_input("Enter the estimated hours"),
            actual_hours=self.get_decimal_input("Enter the actual hours"),
            difficulty=self.get_int_input("Enter the project difficulty (1-5)"),
            notes=self.get_string_input("Enter the project notes"),
        )
        db_project = self.service.add_project(project)
        print(f"You have successfully created project: {db_project}")

    def list_projects(self) -> None:
        projects = self.service.fetch_all_projects()
        print("\nProjects:")
        for project in projects:
            print(f"   {project.project_id}: {project.project_name}")

    def select_project(self) -> None:
        self.list_projects()
        project_id = self.get_int_input("Enter a project ID to select a project")
        self.current_project = None
        if project_id is None:
            return
        self.current_project = self.service.fetch_project_by_id(project_id)

    def update_project_details(self) -> None:
        current = self.current_project
        if current is None:
            print("\nPlease select a project.")
            return

        patch = ProjectPatch(
            project_name=self.get_string_input(
                f"Enter the project name [{current.project_name}]"
            ),
            estimated_hours=self.get_decimal_input(
                f"Enter the estimated hours [{current.estimated_hours}]"
            ),
            actual_hours=self.get_decimal_input(
                f"Enter the actual hours [{current.actual_hours}]"
            ),
            difficulty=self.get_int_input(
                f"Enter the project difficulty (1-5) [{current.difficulty}]"
            ),
            notes=self.get_string_input(f"Enter the project notes [{current.notes}]"),
        )
        if patch.is_empty():
            print("\nNothing to update.")
            return

        updated = patch.apply_to(current)
        self.service.modify_project_details(updated)
        self.current_project = self.service.fetch_project_by_id(updated.project_id)

    def delete_project(self) -> None:
        self.list_projects()
        project_id = self.get_int_input("Enter the ID of the project to delete")
        if project_id is None:
            return

        self.service.delete_project(project_id)
        print(f"Project {project_id} was deleted successfully.")

        if (
            self.current_project is not None
            and self.current_project.project_id == project_id
        ):
            self.current_project = None

    def exit_menu(self) -> bool:
        print("\nExiting the menu.")
        return True

    def get_user_selection(self) -> int:
        self.print_operations()
        selection = self.get_int_input("Enter a menu selection")
        return -1 if selection is None else selection

    def print_operations(self) -> None:
        print("\nThese are the available selections. Press the Enter key to quit:")
        for line in OPERATIONS:
            print(f"  {line}")

        if self.current_project is None:
            print("\nYou are not working with a project.")
        else:
            print(f"\nYou are working with project: {self.current_project}")

    def get_int_input(self, prompt: str) -> int | None:
        return parse_int(self.get_string_input(prompt))

    def get_decimal_input(self, prompt: str) -> Decimal | None:
        return parse_decimal(self.get_string_input(prompt))

    def get_string_input(self, prompt: str) -> str | None:
        try:
            answer = input(f"{prompt}: ")
        except EOFError:
            return None
        return answer.strip() or None
