"""Shared plotting utilities used by figure factories."""

from __future__ import annotations

from pathlib import Path


def sanitize_label(label: str, max_len: int = 40) -> str:
    """Create deterministic filesystem-safe stems for report names."""
    clean = "".join(ch if (ch.isalnum() or ch in "_-") else "_" for ch in str(label))
    clean = clean.strip("_") or "report"
    return clean[:max_len]


def pdf_path(out: str | Path) -> Path:
    """Append ``.pdf`` unless the path already ends with it."""
    p = Path(out)
    if p.suffix.lower() != ".pdf":
        p = p.with_name(p.name + ".pdf")
    return p
