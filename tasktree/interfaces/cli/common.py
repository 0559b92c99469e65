"""Shared utilities for tasktree CLI commands.

This module provides common utilities used across CLI commands:
- Reusable options (store file, date, filter)
- Filter and date parsing
- Formatted output helpers (error, success, info)
"""

from datetime import date
from typing import Annotated, Optional

import typer
from pydantic import TypeAdapter, ValidationError

from tasktree.application import parse_date_input
from tasktree.domain.shared import Err
from tasktree.domain.task import FilterId, ProjectFilter, SectionFilter

# Reusable options for CLI commands
# Usage: def my_command(store: StoreOption = None) -> None:
StoreOption = Annotated[Optional[str], typer.Option(
    "--store", "-s",
    help="Task store file (or set TASKTREE_STORE env var)",
    envvar="TASKTREE_STORE",
)]

TodayOption = Annotated[Optional[str], typer.Option(
    "--today",
    help="Date to treat as today, YYYY-MM-DD (or set TASKTREE_TODAY env var)",
    envvar="TASKTREE_TODAY",
)]

FilterOption = Annotated[Optional[str], typer.Option(
    "--filter", "-f",
    help="Filter: a name like 'ready', 'project:<id>' or 'section:<name>'",
)]

_FILTER = TypeAdapter(FilterId)


def parse_filter(text: str) -> FilterId:
    """Parse a filter given on the command line.

    Args:
        text: ``ready``, ``done``, ... or ``project:<id>`` or ``section:<name>``

    Returns:
        The filter

    Raises:
        typer.BadParameter: If the text names no filter.
    """
    kind, _, value = text.partition(":")
    try:
        if kind == "project" and value:
            return ProjectFilter(project=value)
        if kind == "section" and value:
            return SectionFilter(section=value)
        return _FILTER.validate_python(text)
    except ValidationError:
        raise typer.BadParameter(f"Unknown filter: {text}") from None


def format_filter(filter_id: FilterId) -> str:
    """The command-line spelling of a filter."""
    if isinstance(filter_id, ProjectFilter):
        return f"project:{filter_id.project}"
    if isinstance(filter_id, SectionFilter):
        return f"section:{filter_id.section}"
    return filter_id


def parse_today(text: str | None) -> date:
    """The date given with --today, or the current date."""
    if not text:
        return date.today()
    result = parse_date_input(text)
    if isinstance(result, Err) or result.value is None:
        raise typer.BadParameter(f"Not a date: {text}")
    return result.value


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message.

    Args:
        msg: Success message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


__all__ = [
    "StoreOption",
    "TodayOption",
    "FilterOption",
    "parse_filter",
    "format_filter",
    "parse_today",
    "print_error",
    "print_success",
    "print_info",
    "print_warning",
]
