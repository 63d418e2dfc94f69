"""Tests for survey loading."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest

from packages.core.types import ProjectMetadata, Survey, SurveyFloor, WindowInput
from packages.tolerance.loader import load_csv, load_json, load_survey

from helpers import make_window

_COLUMNS = ["floor", *WindowInput.model_fields]


def _write_csv(path: Path, rows: list[tuple[str, WindowInput]]) -> None:
    """Helper: write (floor, window) pairs as a CSV measurement sheet."""
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=_COLUMNS)
        writer.writeheader()
        for floor, window in rows:
            writer.writerow({"floor": floor, **window.model_dump()})


def _write_json(path: Path, survey: Survey) -> None:
    path.write_text(survey.model_dump_json(indent=2), encoding="utf-8")


class TestLoadJson:
    def test_round_trip(self, tmp_path: Path):
        survey = Survey(
            project=ProjectMetadata(building_name="Tower A", engineer_name="R. Karimi"),
            floors=[
                SurveyFloor(windows=[make_window("W1"), make_window("W2")]),
                SurveyFloor(name="Roof", windows=[make_window("R1")]),
            ],
        )
        path = tmp_path / "survey.json"
        _write_json(path, survey)

        loaded = load_json(path)
        assert loaded == survey

    def test_load_survey_dispatch(self, tmp_path: Path):
        path = tmp_path / "survey.JSON"
        _write_json(path, Survey(floors=[SurveyFloor(windows=[make_window()])]))
        assert len(load_survey(path).floors) == 1


class TestLoadCsv:
    def test_groups_rows_by_floor(self, tmp_path: Path):
        path = tmp_path / "sheet.csv"
        _write_csv(path, [
            ("1", make_window("A1")),
            ("2", make_window("B1")),
            ("1", make_window("A2")),
            ("Roof", make_window("R1")),
        ])

        survey = load_csv(path)
        assert [f.name for f in survey.floors] == [None, None, "Roof"]
        assert [[w.code for w in f.windows] for f in survey.floors] == [["A1", "A2"], ["B1"], ["R1"]]
        assert survey.floors[0].windows[0] == make_window("A1")

    def test_missing_column(self, tmp_path: Path):
        path = tmp_path / "sheet.csv"
        path.write_text("floor,code\n1,W1\n", encoding="utf-8")
        with pytest.raises(ValueError, match="missing column"):
            load_csv(path)

    def test_non_numeric_value(self, tmp_path: Path):
        path = tmp_path / "sheet.csv"
        _write_csv(path, [("1", make_window())])
        text = path.read_text(encoding="utf-8").replace("1198.0", "abc", 1)
        path.write_text(text, encoding="utf-8")
        with pytest.raises(ValueError, match="line 2"):
            load_csv(path)


class TestUnsupportedFormat:
    def test_unsupported_extension(self, tmp_path: Path):
        fake = tmp_path / "survey.xlsx"
        fake.write_text("dummy")
        with pytest.raises(ValueError, match="Unsupported"):
            load_survey(fake)


class TestCsvEncoding:
    def test_byte_order_mark(self, tmp_path: Path):
        path = tmp_path / "excel.csv"
        _write_csv(path, [("1", make_window("W1"))])
        path.write_bytes(b"\xef\xbb\xbf" + path.read_bytes())

        survey = load_csv(path)
        assert [w.code for w in survey.floors[0].windows] == ["W1"]
