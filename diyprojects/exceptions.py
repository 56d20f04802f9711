"""Error types raised by the data-access layer and the menu."""


class DbError(Exception):
    """Any failure while talking to the project store."""


class DbConnectionError(DbError):
    """A session to the backing store could not be established."""


class TransactionError(DbError):
    """Beginning, committing or rolling back a transaction failed."""


class ParameterBindingError(DbError):
    """A value does not fit the placeholder it was bound to."""


class RowMappingError(DbError):
    """A result row could not be turned into an entity."""


class ProjectNotFoundError(DbError):
    """No project exists for the requested identity."""

    def __init__(self, project_id: int) -> None:
        super().__init__(f"Project with project ID={project_id} does not exist.")
        self.project_id = project_id


class InvalidInputError(ValueError):
    """User input could not be parsed."""
