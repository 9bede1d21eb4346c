"""CLI error handling utilities with styled output.

All errors use a red "Error:" prefix and exit with status 1.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import NoReturn, TypeVar

import click

from tabnest.cli.output import user_output
from tabnest.core.errors import TabNestError

T = TypeVar("T")


def fail(error_message: str) -> NoReturn:
    """Output a styled error and exit.

    Raises:
        SystemExit: Always (with exit code 1)
    """
    user_output(click.style("Error: ", fg="red") + error_message)
    raise SystemExit(1)


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Returns:
            The value unchanged

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            fail(error_message)
        return value

    @staticmethod
    @contextmanager
    def no_tabnest_errors(describe: Callable[[TabNestError], str] = str) -> Iterator[None]:
        """Turn TabNestError raised inside the block into a styled error exit."""
        try:
            yield
        except TabNestError as e:
            fail(describe(e))
