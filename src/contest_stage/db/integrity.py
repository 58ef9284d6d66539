"""Classify integrity errors raised by the database driver."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError


def violates_unique(
    exc: IntegrityError,
    constraint: str,
    table: str,
    columns: Sequence[str],
) -> bool:
    """Return True when ``exc`` was raised by the named unique constraint.

    PostgreSQL drivers report the constraint name; SQLite only lists the
    columns, as ``UNIQUE constraint failed: table.col, table.col``.
    """
    diag = getattr(exc.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    if constraint_name is not None:
        return constraint_name == constraint

    message = str(exc.orig)
    if constraint in message:
        return True
    listed = ", ".join(f"{table}.{column}" for column in columns)
    return f"UNIQUE constraint failed: {listed}" in message
