"""Shared domain utilities."""

from tasktree.domain.shared.result import Err, Ok, Result, flat_map

__all__ = [
    "Ok",
    "Err",
    "Result",
    "flat_map",
]
