"""
Input/Output Manager (JSON)
Handles loading and saving labeled point datasets as .json files.

File layout is a JSON array of records:
    [{"text": "King", "x": 4, "y": 4, "z": 1, "color": "#FFD700"}, ...]
"color" may be omitted (white), a "#RRGGBB" string or a packed integer.
"""
import json
import logging
import math
from typing import Any, Iterable, List

from semanticspace.model.dataset import LabeledPoint, parse_color

logger = logging.getLogger(__name__)

_COORDINATES = ("x", "y", "z")


class IOManager:
    @staticmethod
    def load_dataset(filepath: str) -> List[LabeledPoint]:
        logger.info(f"Loading dataset from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                raw = json.load(f)
            points = IOManager.parse_records(raw)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Failed to load dataset '{filepath}': {e}")
            raise

        logger.info(f"Loaded {len(points)} points.")
        return points

    @staticmethod
    def save_dataset(points: Iterable[LabeledPoint], filepath: str) -> None:
        logger.info(f"Saving dataset to: {filepath}")
        records = [
            {
                "text": p.text,
                "x": p.x,
                "y": p.y,
                "z": p.z,
                "color": f"#{p.resolved_color:06X}",
            }
            for p in points
        ]
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save dataset '{filepath}': {e}")
            raise
        logger.debug(f"Saved {len(records)} points.")

    @staticmethod
    def parse_records(raw: Any) -> List[LabeledPoint]:
        """
        Validate decoded JSON and build the points.

        Raises:
            ValueError: If the document is not a list of valid records. The
                message names the index of the offending record.
        """
        if not isinstance(raw, list):
            raise ValueError(f"Expected a JSON array of points, got {type(raw).__name__}.")

        return [IOManager._parse_record(index, record) for index, record in enumerate(raw)]

    @staticmethod
    def _parse_record(index: int, record: Any) -> LabeledPoint:
        if not isinstance(record, dict):
            raise ValueError(f"Point #{index}: expected an object, got {type(record).__name__}.")

        text = record.get("text")
        if not isinstance(text, str):
            raise ValueError(f"Point #{index}: missing or non-string 'text'.")

        coords = []
        for axis in _COORDINATES:
            value = record.get(axis)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Point #{index} ({text!r}): missing or non-numeric '{axis}'.")
            try:
                number = float(value)
            except OverflowError:
                # JSON integers are unbounded
                raise ValueError(f"Point #{index} ({text!r}): '{axis}' is out of range.") from None
            if not math.isfinite(number):
                raise ValueError(f"Point #{index} ({text!r}): '{axis}' must be finite.")
            coords.append(number)

        try:
            color = parse_color(record.get("color"))
        except ValueError as e:
            raise ValueError(f"Point #{index} ({text!r}): {e}") from None

        return LabeledPoint(text, coords[0], coords[1], coords[2], color)
