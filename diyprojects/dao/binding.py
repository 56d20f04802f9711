"""Typed positional parameter binding for repository statements."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from sqlalchemy.sql import Executable

from diyprojects.exceptions import ParameterBindingError

_CENTS = Decimal("0.01")


class ScalarKind(str, Enum):
    """Scalar kinds a placeholder can be declared with."""

    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"


def _coerce_text(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError
    return value


def _coerce_integer(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError
    return value


def _coerce_decimal(value: object) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise TypeError
    try:
        return Decimal(value).quantize(_CENTS)
    except InvalidOperation as exc:
        raise TypeError from exc


_COERCERS = {
    ScalarKind.TEXT: _coerce_text,
    ScalarKind.INTEGER: _coerce_integer,
    ScalarKind.DECIMAL: _coerce_decimal,
}


class PreparedStatement:
    """A SQLAlchemy statement plus the values bound to its placeholders.

    Placeholders are addressed by 1-based position; ``names`` lists the
    ``bindparam`` keys of the statement in positional order.
    """

    def __init__(self, clause: Executable, names: Sequence[str]) -> None:
        self.clause = clause
        self.names = tuple(names)
        self.params: dict[str, Any] = {}

    def bind(self, position: int, value: object, kind: ScalarKind) -> None:
        """Write ``value`` into placeholder ``position`` as ``kind``.

        ``None`` always binds SQL NULL.
        """
        if not 1 <= position <= len(self.names):
            raise ParameterBindingError(
                f"Statement has {len(self.names)} parameters, "
                f"cannot bind position {position}"
            )
        name = self.names[position - 1]
        if value is None:
            self.params[name] = None
            return
        try:
            self.params[name] = _COERCERS[kind](value)
        except TypeError as exc:
            raise ParameterBindingError(
                f"Parameter {position} ({name}) expects {kind.value}, "
                f"got {type(value).__name__}: {value!r}"
            ) from exc

    def missing(self) -> list[str]:
        """Return placeholder names that were never bound."""
        return [name for name in self.names if name not in self.params]


def bind(
    statement: PreparedStatement, position: int, value: object, kind: ScalarKind
) -> None:
    """Bind ``value`` into ``statement``; see :meth:`PreparedStatement.bind`."""
    statement.bind(position, value, kind)
