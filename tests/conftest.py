# Shared pytest fixtures
from __future__ import annotations
import io

import pandas as pd
import pytest


@pytest.fixture()
def inventory_rows() -> list[list]:
    return [
        ["SKU", "Name", "Current Stock Level"],
        ["A1", "Widget", "3"],
        ["A2", "Gadget", "7"],
        ["B9", "Gizmo", "N/A"],
    ]


@pytest.fixture()
def make_csv():
    def _make(rows: list[list], encoding: str = "utf-8") -> bytes:
        return "\n".join(",".join(str(c) for c in r) for r in rows).encode(encoding) + b"\n"
    return _make


@pytest.fixture()
def make_xlsx():
    def _make(rows: list[list]) -> bytes:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name="Inventory", header=False, index=False)
        return buffer.getvalue()
    return _make
