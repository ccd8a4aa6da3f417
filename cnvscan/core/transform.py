"""Conversions between log2(CPM/10+1) and linear CPM units."""

from __future__ import annotations

import numpy as np


def to_linear(x):
    """Invert log2(CPM/10+1) scaling: ``(2**x - 1) * 10``.

    Works element-wise on scalars, arrays and pandas objects; the input type
    is preserved.
    """
    return (np.power(2.0, x) - 1.0) * 10.0


def to_log_cpm(v):
    """Apply log2(CPM/10+1) scaling (inverse of :func:`to_linear`)."""
    return np.log2(v / 10.0 + 1.0)


def log1p2(x):
    return np.log2(x + 1.0)
