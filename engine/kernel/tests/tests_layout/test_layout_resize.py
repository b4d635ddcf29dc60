"""
Lumina Resize Policy — Width Redistribution Tests

Only the resized block's width is authoritative. In a row container the next
sibling (and only the next sibling) absorbs the delta when its width is a
percentage, floored at 5%. Column containers and the top level never compensate.
"""

import pytest

from engine.kernel.layout import clamp_width, format_percent, parse_width, resize
from engine.kernel.types import Block, BlockKind, find_by_id


def leaf(block_id, width=None):
    style = {} if width is None else {"width": width}
    return Block(id=block_id, kind=BlockKind.TEXT, content=block_id, style=style)


def row(block_id, *children, direction="row"):
    style = {} if direction is None else {"flex-direction": direction}
    return Block(id=block_id, kind=BlockKind.CONTAINER, style=style, children=tuple(children))


def width_of(forest, block_id):
    return find_by_id(forest, block_id).style.get("width")


# ============================================================================
# Parsing helpers
# ============================================================================


class TestParsing:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("42.5%", 42.5),
            ("300px", 300.0),
            ("100", 100.0),
            (" 7.25%", 7.25),
            (".5%", 0.5),
        ],
    )
    def test_leading_number(self, raw, expected):
        assert parse_width(raw) == expected

    def test_absent_defaults_to_100(self):
        assert parse_width(None) == 100.0

    def test_non_numeric_defaults_to_100(self):
        assert parse_width("auto") == 100.0

    def test_custom_default(self):
        assert parse_width("auto", default=None) is None

    def test_clamp(self):
        assert clamp_width(1) == 5.0
        assert clamp_width(150) == 100.0
        assert clamp_width(50) == 50

    def test_format_one_decimal(self):
        assert format_percent(42.34) == "42.3%"
        assert format_percent(30) == "30.0%"


# ============================================================================
# Row compensation
# ============================================================================


class TestRowCompensation:
    def test_sixty_forty_to_seventy_thirty(self):
        forest = (row("r", leaf("a", "60%"), leaf("b", "40%")),)
        result = resize(forest, "a", 70)
        assert width_of(result, "a") == "70.0%"
        assert width_of(result, "b") == "30.0%"

    def test_shrinking_grows_neighbour(self):
        forest = (row("r", leaf("a", "60%"), leaf("b", "40%")),)
        result = resize(forest, "a", 45.5)
        assert width_of(result, "a") == "45.5%"
        assert width_of(result, "b") == "54.5%"

    def test_neighbour_floored_at_five(self):
        forest = (row("r", leaf("a", "60%"), leaf("b", "10%")),)
        result = resize(forest, "a", 90)
        assert width_of(result, "b") == "5.0%"

    def test_missing_target_width_uses_100_base(self):
        forest = (row("r", leaf("a"), leaf("b", "50%")),)
        result = resize(forest, "a", 80)
        assert width_of(result, "a") == "80.0%"
        assert width_of(result, "b") == "70.0%"

    def test_neighbour_in_px_untouched(self):
        forest = (row("r", leaf("a", "60%"), leaf("b", "200px")),)
        result = resize(forest, "a", 70)
        assert width_of(result, "b") == "200px"

    def test_neighbour_without_width_untouched(self):
        forest = (row("r", leaf("a", "60%"), leaf("b")),)
        result = resize(forest, "a", 70)
        assert width_of(result, "b") is None

    def test_previous_sibling_untouched(self):
        forest = (row("r", leaf("z", "20%"), leaf("a", "40%"), leaf("b", "40%")),)
        result = resize(forest, "a", 50)
        assert width_of(result, "z") == "20%"
        assert width_of(result, "b") == "30.0%"

    def test_only_next_sibling_adjusted(self):
        forest = (row("r", leaf("a", "40%"), leaf("b", "30%"), leaf("c", "30%")),)
        result = resize(forest, "a", 50)
        assert width_of(result, "b") == "20.0%"
        assert width_of(result, "c") == "30%"

    def test_last_child_has_no_neighbour(self):
        forest = (row("r", leaf("a", "50%"), leaf("b", "50%")),)
        result = resize(forest, "b", 60)
        assert width_of(result, "a") == "50%"
        assert width_of(result, "b") == "60.0%"

    def test_target_width_in_px_used_as_base(self):
        forest = (row("r", leaf("a", "30px"), leaf("b", "50%")),)
        result = resize(forest, "a", 40)
        assert width_of(result, "b") == "40.0%"


# ============================================================================
# No compensation
# ============================================================================


class TestNoCompensation:
    def test_column_container(self):
        forest = (row("c", leaf("a", "60%"), leaf("b", "40%"), direction="column"),)
        result = resize(forest, "a", 70)
        assert width_of(result, "a") == "70.0%"
        assert width_of(result, "b") == "40%"

    def test_container_without_direction_is_column(self):
        forest = (row("c", leaf("a", "60%"), leaf("b", "40%"), direction=None),)
        result = resize(forest, "a", 70)
        assert width_of(result, "b") == "40%"

    def test_top_level(self):
        forest = (leaf("a", "60%"), leaf("b", "40%"))
        result = resize(forest, "a", 70)
        assert width_of(result, "b") == "40%"


# ============================================================================
# Recursion, clamping, persistence
# ============================================================================


class TestResizeGeneral:
    def test_nested_row_inside_column(self):
        forest = (
            row(
                "page",
                leaf("intro", "100%"),
                row("cols", leaf("left", "50%"), leaf("right", "50%")),
                direction="column",
            ),
        )
        result = resize(forest, "left", 65)
        assert width_of(result, "left") == "65.0%"
        assert width_of(result, "right") == "35.0%"
        assert width_of(result, "intro") == "100%"

    def test_input_clamped_high(self):
        forest = (leaf("a", "50%"),)
        assert width_of(resize(forest, "a", 150), "a") == "100.0%"

    def test_input_clamped_low(self):
        forest = (leaf("a", "50%"),)
        assert width_of(resize(forest, "a", 1), "a") == "5.0%"

    def test_clamped_value_drives_delta(self):
        forest = (row("r", leaf("a", "90%"), leaf("b", "10%")),)
        result = resize(forest, "a", 200)
        assert width_of(result, "a") == "100.0%"
        assert width_of(result, "b") == "5.0%"

    def test_unknown_id_is_noop(self):
        forest = (row("r", leaf("a", "60%"), leaf("b", "40%")),)
        assert resize(forest, "missing", 70) is forest

    def test_input_forest_untouched(self):
        forest = (row("r", leaf("a", "60%"), leaf("b", "40%")), leaf("other"))
        result = resize(forest, "a", 70)
        assert width_of(forest, "a") == "60%"
        assert width_of(forest, "b") == "40%"
        assert result[1] is forest[1]

    def test_other_style_keys_kept(self):
        block = Block(id="a", kind=BlockKind.TEXT, style={"width": "50%", "color": "#000000"})
        result = resize((block,), "a", 25)
        assert find_by_id(result, "a").style == {"width": "25.0%", "color": "#000000"}

    def test_repeated_drag_updates_each_valid(self):
        forest = (row("r", leaf("a", "50%"), leaf("b", "50%")),)
        for width in (52, 55, 58, 60):
            forest = resize(forest, "a", width)
            total = sum(float(width_of(forest, x)[:-1]) for x in ("a", "b"))
            assert total == pytest.approx(100.0)
