"""Window smoothing helpers shared by the chromosome scan and heatmap code."""

from __future__ import annotations

import numpy as np

from cnvscan.core.types import PLACEHOLDER_LENGTH


def _validate_window(w: int) -> int:
    if int(w) != w or int(w) < 1:
        raise ValueError("w must be an integer >= 1.")
    w_i = int(w)
    if w_i % 2 == 0:
        raise ValueError("w must be odd.")
    return w_i


def centered_moving_average(x: np.ndarray, w: int) -> np.ndarray:
    """Centered moving average with odd window length ``w``.

    Args:
        x: 1D numeric array ordered by genomic position.
        w: Odd window size, at most ``len(x)``.

    Returns:
        Array of length ``len(x) - w + 1``; element ``i`` is the mean of
        ``x[i:i + w]`` and belongs to input index ``i + w // 2``.
    """

    arr = np.asarray(x, dtype=float).ravel()
    w_i = _validate_window(w)
    if arr.size == 0:
        raise ValueError("x must contain at least one value.")
    if w_i > arr.size:
        raise ValueError(f"Window {w_i} exceeds sequence length {arr.size}.")
    if w_i == 1:
        return arr.copy()

    # Running sums keep this linear in the sequence length.
    csum = np.concatenate([[0.0], np.cumsum(arr)])
    out = (csum[w_i:] - csum[:-w_i]) / float(w_i)
    if out.size != arr.size - w_i + 1:
        raise AssertionError("centered_moving_average output length mismatch.")
    return out


def centered_moving_average_columns(mat: np.ndarray, w: int) -> np.ndarray:
    """Apply :func:`centered_moving_average` to every column of a 2D array."""
    arr = np.asarray(mat, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"mat must be 2D, got shape {arr.shape}.")
    w_i = _validate_window(w)
    if w_i > arr.shape[0]:
        raise ValueError(f"Window {w_i} exceeds sequence length {arr.shape[0]}.")
    csum = np.vstack([np.zeros((1, arr.shape[1])), np.cumsum(arr, axis=0)])
    return (csum[w_i:] - csum[:-w_i]) / float(w_i)


def degenerate_placeholder() -> np.ndarray:
    return np.ones(PLACEHOLDER_LENGTH, dtype=float)


def smooth_or_placeholder(x: np.ndarray, w: int) -> tuple[np.ndarray, bool]:
    """Smooth ``x`` or return the constant placeholder when ``len(x) <= w``.

    Returns:
        ``(values, degenerate)``.
    """
    arr = np.asarray(x, dtype=float).ravel()
    w_i = _validate_window(w)
    if arr.size <= w_i:
        return degenerate_placeholder(), True
    return centered_moving_average(arr, w_i), False
