"""
Tests for color/logic (classifier.py, blue_rule.py)

Covers:
- find_closest_color() on anchors, common flag shades and ties
- sort_palette_order() / coerce_canonical()
- apply_blue_exception() thresholds and immutability
"""

import importlib

import pytest

constants = importlib.import_module("flag_color_extractor.extraction.color.constants")
classifier = importlib.import_module("flag_color_extractor.extraction.color.logic.classifier")
blue_rule = importlib.import_module("flag_color_extractor.extraction.color.logic.blue_rule")

CC = constants.CanonicalColor


def test_palette_is_closed_and_total():
    assert len(CC) == 12
    assert set(constants.PALETTE) == set(CC)
    assert [c.value for c in CC] == [
        "black", "white", "grey", "pink", "red", "orange",
        "yellow", "green", "blue", "light blue", "purple", "brown",
    ]
    with pytest.raises(TypeError):
        constants.PALETTE[CC.RED] = (0, 0, 0)


# ──────────────────────────────────────────────────────────────────────────────
# Nearest color
# ──────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("color", list(CC))
def test_anchor_classifies_to_itself(color):
    assert classifier.find_closest_color(constants.PALETTE[color]) is color


@pytest.mark.parametrize(
    "rgb,expect",
    [
        ((255, 0, 0), CC.RED),
        ((0, 0, 255), CC.BLUE),
        ((0, 0, 128), CC.BLUE),
        ((0, 31, 110), CC.BLUE),
        ((127, 212, 255), CC.LIGHT_BLUE),
        ((0, 150, 57), CC.GREEN),
        ((255, 215, 0), CC.YELLOW),
        ((250, 250, 250), CC.WHITE),
        ((20, 20, 20), CC.BLACK),
    ],
)
def test_common_flag_shades(rgb, expect):
    assert classifier.find_closest_color(rgb) is expect


def test_tie_goes_to_first_anchor(monkeypatch):
    palette = {CC.WHITE: (10, 0, 0), CC.BLACK: (0, 0, 0)}
    monkeypatch.setattr(classifier, "PALETTE", palette, raising=True)
    assert classifier.find_closest_color((5, 0, 0)) is CC.WHITE


def test_sort_palette_order_dedupes():
    got = classifier.sort_palette_order([CC.BLUE, CC.RED, CC.WHITE, CC.RED, CC.BLACK])
    assert got == (CC.BLACK, CC.WHITE, CC.RED, CC.BLUE)


@pytest.mark.parametrize(
    "name,expect",
    [
        ("light blue", CC.LIGHT_BLUE),
        ("Light-Blue", CC.LIGHT_BLUE),
        ("lightblue", CC.LIGHT_BLUE),
        ("gray", CC.GREY),
        (" RED ", CC.RED),
        (CC.PINK, CC.PINK),
    ],
)
def test_coerce_canonical(name, expect):
    assert classifier.coerce_canonical(name) is expect


@pytest.mark.parametrize("name", ["teal", "navy", "", "dark red"])
def test_coerce_canonical_rejects_other_names(name):
    with pytest.raises(ValueError):
        classifier.coerce_canonical(name)


# ──────────────────────────────────────────────────────────────────────────────
# Blue / light-blue rule
# ──────────────────────────────────────────────────────────────────────────────
def test_blue_exception_adds_light_blue():
    colors = {CC.BLUE, CC.WHITE}
    got = blue_rule.apply_blue_exception(colors, [(0, 31, 110), (127, 212, 255)])
    assert got == {CC.BLUE, CC.LIGHT_BLUE, CC.WHITE}
    assert colors == {CC.BLUE, CC.WHITE}  # input untouched


def test_blue_exception_close_blues_noop():
    got = blue_rule.apply_blue_exception({CC.BLUE}, [(22, 48, 95), (26, 56, 112)])
    assert got == {CC.BLUE}


def test_blue_exception_requires_blue():
    got = blue_rule.apply_blue_exception({CC.LIGHT_BLUE}, [(0, 31, 110), (127, 212, 255)])
    assert got == {CC.LIGHT_BLUE}


def test_blue_exception_requires_two_raw_blues():
    assert blue_rule.apply_blue_exception({CC.BLUE}, [(127, 212, 255)]) == {CC.BLUE}


def test_blue_exception_lightest_must_be_light():
    # spread > 20 but the lightest stays at ~40 lightness
    dark, mid = (0, 0, 60), (40, 80, 200)
    lo, hi = blue_rule.blue_lightness_range([dark, mid])
    assert hi - lo > 20 and hi <= 45
    assert blue_rule.apply_blue_exception({CC.BLUE}, [dark, mid]) == {CC.BLUE}


def test_blue_exception_idempotent_when_present():
    colors = frozenset({CC.BLUE, CC.LIGHT_BLUE})
    assert blue_rule.apply_blue_exception(colors, [(0, 31, 110), (127, 212, 255)]) == colors


def test_blue_lightness_range_empty():
    assert blue_rule.blue_lightness_range([]) is None
