"""Data-sufficiency errors raised by the core computations."""

from __future__ import annotations


class MissingSubjectCellsError(ValueError):
    """Subject filter selected no target columns."""
