from __future__ import annotations

from pathlib import Path

import polars as pl

from app.data import HOUSING_COLUMNS, demo_housing_frame, ensure_demo_data
from app.ui.helpers import brush_bounds, clicked_node_id, pluralize
from sankeysync.io.read import read_records_csv


def test_clicked_node_id_from_event_dict() -> None:
    event = {"selection": {"node_click": [{"node_id": 4}]}}
    assert clicked_node_id(event, "node_click") == 4
    assert clicked_node_id({"selection": {"node_click": []}}, "node_click") is None
    assert clicked_node_id({"selection": {}}, "node_click") is None
    assert clicked_node_id(None, "node_click") is None


def test_brush_bounds_from_event_dict() -> None:
    event = {"selection": {"brush": {"area": [3000, 5000.5], "price": [1, 2]}}}
    assert brush_bounds(event, "brush") == {"area": [3000.0, 5000.5], "price": [1.0, 2.0]}
    assert brush_bounds({"selection": {"brush": {}}}, "brush") is None
    assert brush_bounds(None, "brush") is None


def test_pluralize() -> None:
    assert pluralize(1, "house") == "1 house"
    assert pluralize(0, "house") == "0 houses"


def test_demo_frame_is_deterministic() -> None:
    a = demo_housing_frame(n=30, seed=3)
    b = demo_housing_frame(n=30, seed=3)
    assert a.equals(b)
    assert tuple(a.columns) == HOUSING_COLUMNS
    assert a.height == 30
    assert a.get_column("area").min() >= 1650


def test_ensure_demo_data_writes_once(tmp_path: Path) -> None:
    path = tmp_path / "data" / "Housing.csv"
    assert ensure_demo_data(path)
    assert not ensure_demo_data(path)
    recs = read_records_csv(path, required=["bedrooms", "area", "price"])
    assert len(recs) == pl.read_csv(path).height == 120
