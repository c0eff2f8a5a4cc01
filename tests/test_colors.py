import pytest

from waffleviz.services.colors import DEFAULT_PALETTE, initialize, reconcile, recolor


def test_default_palette_is_category10():
    assert len(DEFAULT_PALETTE) == 10
    assert len(set(DEFAULT_PALETTE)) == 10
    assert DEFAULT_PALETTE[0] == "#1f77b4"


def test_initialize_follows_domain_order_and_cycles():
    categories = [f"c{idx}" for idx in range(12)]
    colors = initialize(categories)
    assert colors.domain == tuple(categories)
    assert colors.color_for("c0") == DEFAULT_PALETTE[0]
    assert colors.color_for("c10") == DEFAULT_PALETTE[0]
    assert colors.color_for("c11") == DEFAULT_PALETTE[1]


def test_initialize_is_deterministic():
    assert initialize(["b", "a", "c"]) == initialize(["b", "a", "c"])


def test_recolor_keeps_key_order_and_cycles_new_colors():
    base = initialize(["b", "a", "c"])
    recolored = recolor(base, ["red", "green"])
    assert recolored.domain == ("b", "a", "c")
    assert recolored.to_dict() == {"b": "red", "a": "green", "c": "red"}
    again = recolor(recolor(recolored, ["#000000"]), ["red", "green"])
    assert again == recolored


def test_recolor_rejects_bad_colors():
    base = initialize(["a"])
    with pytest.raises(ValueError):
        recolor(base, [])
    with pytest.raises(ValueError):
        recolor(base, ["not-a-color"])


def test_reconcile_keeps_existing_when_category_set_is_unchanged():
    existing = recolor(initialize(["a", "b", "c"]), ["red", "green", "blue"])
    assert reconcile(existing, ["c", "b", "a"]) is existing


def test_reconcile_rebuilds_with_existing_palette_on_new_categories():
    existing = recolor(initialize(["a", "b"]), ["red", "green"])
    rebuilt = reconcile(existing, ["a", "b", "d"])
    assert rebuilt.domain == ("a", "b", "d")
    assert rebuilt.range == ("red", "green", "red")


def test_reconcile_without_existing_initializes():
    assert reconcile(None, ["x", "y"]) == initialize(["x", "y"])


def test_color_for_unknown_category():
    with pytest.raises(KeyError):
        initialize(["a"]).color_for("b")
