"""Load site surveys (project metadata + raw window measurements).

Supported formats
-----------------
* **JSON** – a serialized :class:`~packages.core.types.Survey`.
* **CSV** – one row per window.  A ``floor`` column groups rows into
  floors (in order of first appearance); the remaining columns are the
  :class:`~packages.core.types.WindowInput` field names.  CSV files carry
  no project metadata.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from pydantic import ValidationError

from packages.core.types import Survey, SurveyFloor, WindowInput

logger = logging.getLogger(__name__)

FLOOR_COLUMN = "floor"


def load_json(path: str | Path) -> Survey:
    """Read a JSON survey file."""
    logger.info(f"📄 Reading JSON survey {Path(path).name}...")
    survey = Survey.model_validate_json(Path(path).read_text(encoding="utf-8"))
    n_windows = sum(len(f.windows) for f in survey.floors)
    logger.info(f"✅ Survey loaded: {len(survey.floors)} floor(s), {n_windows} window(s)")
    return survey


def load_csv(path: str | Path) -> Survey:
    """Read a CSV measurement sheet.

    Raises ``ValueError`` if the sheet lacks a required column or a row
    holds a non-numeric measurement.
    """
    logger.info(f"📄 Reading CSV survey {Path(path).name}...")
    floors: dict[str, SurveyFloor] = {}

    # utf-8-sig strips the BOM spreadsheet tools prepend
    with open(path, newline="", encoding="utf-8-sig") as fh:
        reader = csv.DictReader(fh)
        columns = set(reader.fieldnames or [])
        missing = ({FLOOR_COLUMN} | set(WindowInput.model_fields)) - columns
        if missing:
            raise ValueError(f"CSV survey is missing column(s): {', '.join(sorted(missing))}")

        for line_no, row in enumerate(reader, start=2):
            floor_key = (row.pop(FLOOR_COLUMN) or "").strip()
            try:
                window = WindowInput.model_validate(
                    {k: v for k, v in row.items() if k in WindowInput.model_fields}
                )
            except ValidationError as e:
                raise ValueError(f"Invalid row at line {line_no}: {e}") from e
            # bare floor numbers get the generated label
            name = None if not floor_key or floor_key.isdigit() else floor_key
            floor = floors.setdefault(floor_key, SurveyFloor(name=name))
            floor.windows.append(window)

    survey = Survey(floors=list(floors.values()))
    logger.info(f"✅ CSV loaded: {len(survey.floors)} floor(s)")
    return survey


def load_survey(path: str | Path) -> Survey:
    """Auto-detect the format and return the parsed survey.

    Raises ``ValueError`` for unsupported extensions.
    """
    p = Path(path)
    ext = p.suffix.lower()
    if ext == ".json":
        return load_json(p)
    if ext == ".csv":
        return load_csv(p)
    raise ValueError(
        f"Unsupported survey format '{ext}'. Supported: .json, .csv"
    )
