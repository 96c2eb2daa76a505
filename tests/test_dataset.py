import pytest

from semanticspace.model.dataset import (
    DEFAULT_DATASET,
    WHITE,
    LabeledPoint,
    hex_to_rgb,
    parse_color,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, 0xFFFFFF),
        (0xFFD700, 0xFFD700),
        (0, 0),
        ("#007bff", 0x007BFF),
        ("0x28A745", 0x28A745),
        ("  #FFFFFF ", 0xFFFFFF),
    ],
)
def test_parse_color_accepts_supported_forms(value, expected) -> None:
    assert parse_color(value) == expected


@pytest.mark.parametrize("value", [-1, 0x1000000, True, "red", "#FFF", "#GGGGGG", 1.5, [255, 0, 0]])
def test_parse_color_rejects_invalid_values(value) -> None:
    with pytest.raises(ValueError):
        parse_color(value)


def test_hex_to_rgb() -> None:
    assert hex_to_rgb(0xFF0000) == (1.0, 0.0, 0.0)
    assert hex_to_rgb(WHITE) == (1.0, 1.0, 1.0)
    assert hex_to_rgb(0x8B4513) == (0x8B / 255.0, 0x45 / 255.0, 0x13 / 255.0)


def test_labeled_point_without_color_is_white() -> None:
    point = LabeledPoint("Leader", 0, 0, 2)

    assert point.color is None
    assert point.resolved_color == WHITE
    assert point.rgb == (1.0, 1.0, 1.0)
    assert point.position == (0, 0, 2)


def test_default_dataset_contents() -> None:
    texts = [p.text for p in DEFAULT_DATASET]

    assert len(DEFAULT_DATASET) == 14
    assert texts[0] == "King"
    assert "Apple (Fruit)" in texts
    assert "Apple (Tech)" in texts

    king = DEFAULT_DATASET[0]
    assert king.position == (4, 4, 1)
    assert king.color == 0xFFD700


def test_homonyms_sit_at_distinct_positions() -> None:
    apples = [p for p in DEFAULT_DATASET if p.text.startswith("Apple")]

    assert len(apples) == 2
    assert apples[0].position != apples[1].position
