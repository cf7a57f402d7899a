from __future__ import annotations

from modules.processor import build_preview
from modules.session import Session, load_file, submit_search
from modules.ui import preview_caption, style_preview


def test_caption_without_data():
    assert preview_caption(Session()) == "No data loaded"


def test_caption_caps_shown_rows(make_csv):
    rows = [["SKU", "Stock"]] + [[f"A{i}", "1"] for i in range(250)]
    session = load_file(Session(), make_csv(rows), "big.csv")
    assert preview_caption(session) == "Loaded 250 rows. Showing 200 rows."


def test_caption_small_sheet(make_csv, inventory_rows):
    session = load_file(Session(), make_csv(inventory_rows), "inventory.csv")
    assert preview_caption(session) == "Loaded 3 rows. Showing 3 rows."


def test_highlight_styles_only_updated_row(make_csv, inventory_rows):
    session = submit_search(load_file(Session(), make_csv(inventory_rows), "inventory.csv"), "A2", 1)
    styler = style_preview(build_preview(session.rows), session.highlight_index)
    css = styler.to_html().split("</style>")[0]
    # A2 is sheet row 2, i.e. the second preview row (positional id row1)
    assert "#fff3bf" in css
    assert "row1_col0" in css
    assert "row0_col0" not in css
    assert "row2_col0" not in css


def test_no_highlight_without_update(make_csv, inventory_rows):
    session = load_file(Session(), make_csv(inventory_rows), "inventory.csv")
    html = style_preview(build_preview(session.rows), session.highlight_index).to_html()
    assert "#fff3bf" not in html


def test_highlight_with_clashing_header_labels():
    rows = [["SKU", "SKU", "SKU (2)", "Stock"], ["A1", "x", "y", "1"]]
    css = style_preview(build_preview(rows), 1).to_html().split("</style>")[0]
    assert "row0_col3" in css
