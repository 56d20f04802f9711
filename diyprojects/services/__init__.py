"""Service layer between the menu and the repository."""
