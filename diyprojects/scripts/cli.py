"""CLI tool for diyprojects."""

from __future__ import annotations

import argparse
import sys

from diyprojects.config import config
from diyprojects.database import init_db
from diyprojects.exceptions import DbError
from diyprojects.logging_config import configure_logging
from diyprojects.menu import ProjectsApp
from diyprojects.scripts.seed_demo import seed_demo_data


def run_menu() -> None:
    """Bootstrap the schema and run the interactive menu."""
    init_db()
    ProjectsApp().run()


def create_schema() -> None:
    """Create the project tables."""
    init_db()
    print("Database schema is ready.")


def seed_demo() -> None:
    """Create the schema and load demo projects."""
    init_db()
    created = seed_demo_data()
    print(f"Seeded {created} demo project(s).")


def main() -> None:
    parser = argparse.ArgumentParser(description="Track DIY projects.")
    parser.add_argument(
        "--debug",
        action="store_true",
        default=config.DEBUG,
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("menu", help="Run the interactive menu (default)")
    subparsers.add_parser("init-db", help="Create the database tables")
    subparsers.add_parser("seed-demo", help="Load demo projects")

    args = parser.parse_args()
    configure_logging(debug=args.debug)

    try:
        if args.command == "init-db":
            create_schema()
        elif args.command == "seed-demo":
            seed_demo()
        else:
            run_menu()
    except DbError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
