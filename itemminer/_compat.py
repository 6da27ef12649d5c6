from __future__ import annotations

from typing import Any


def frame_kind(data: Any) -> str:
    """Name the frame family of *data*: ``"pyarrow"``, ``"polars"`` or ``"pandas"``."""
    _type = type(data)
    mod = getattr(_type, "__module__", "") or ""
    if _type.__name__ == "Table" and mod.startswith("pyarrow"):
        return "pyarrow"
    if _type.__name__ == "DataFrame" and mod.startswith("polars"):
        return "polars"
    return "pandas"


def to_dataframe(data: Any) -> Any:
    """Coerce PyArrow inputs to a zero-copy Polars DataFrame; return everything else unchanged."""
    if frame_kind(data) == "pyarrow":
        import polars as pl

        return pl.from_arrow(data)

    return data
