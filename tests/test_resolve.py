"""Tests for resolving color descriptions against a palette."""

from __future__ import annotations

import copy
from concurrent.futures import ThreadPoolExecutor

import pytest

from palette_contrast.adjust import AdjustmentRegistry, darken, get_registry, lighten
from palette_contrast.color import Color, parse_color
from palette_contrast.errors import (
    CyclicColorReference,
    InvalidColorDescription,
    NotAColor,
    UnknownAdjustmentFunction,
)
from palette_contrast.resolve import Resolver, resolve, resolve_all, split_description


# ---------------------------------------------------------------------------
# split_description
# ---------------------------------------------------------------------------


class TestSplitDescription:
    def test_plain_string(self):
        assert split_description("link") == ("link", [])

    def test_channels_are_not_a_pair(self):
        assert split_description((1, 2, 3)) == ((1, 2, 3), [])

    def test_pair(self):
        origin, steps = split_description(("focus", [("darken", ["15%"])]))
        assert origin == "focus"
        assert steps == [("darken", ("15%",))]

    def test_mapping(self):
        origin, steps = split_description({"origin": "brand", "adjust": [["lighten", [10]]]})
        assert origin == "brand"
        assert steps == [("lighten", (10,))]

    def test_single_item_step(self):
        _, steps = split_description(("brand", [["grayscale"]]))
        assert steps == [("grayscale", ())]

    @pytest.mark.parametrize(
        "description",
        [
            ("focus", "darken"),
            ("focus", [("darken", "15%")]),
            ("focus", [42]),
            ("focus", ["darken"]),
            ("focus", [(1, ["15%"])]),
            ("focus", [("darken", ["15%"], "extra")]),
            ("a", "b", "c"),
            (None, []),
            (1, 2),
            {"adjust": []},
        ],
    )
    def test_malformed(self, description):
        with pytest.raises(InvalidColorDescription):
            split_description(description)


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


class TestResolveLiterals:
    def test_literal_unchanged(self):
        c = Color(12, 34, 56, 0.5)
        assert resolve(c) == c

    def test_literal_string_without_palette(self):
        assert resolve("#336699") == Color(0x33, 0x66, 0x99)

    def test_literal_adjusted(self):
        assert resolve(("#ffffff", [("darken", ["100%"])])) == Color(0, 0, 0)

    def test_unknown_literal(self):
        with pytest.raises(NotAColor):
            resolve("nope", {"link": "#ff0000"})


class TestResolveReferences:
    def test_simple_reference(self):
        assert resolve("link", {"link": "#ff0000"}) == Color(255, 0, 0)

    def test_palette_name_shadows_css_name(self):
        assert resolve("red", {"red": "#cc0000"}) == Color(0xCC, 0, 0)

    def test_reference_with_adjustments(self, brand_palette):
        expected = darken(parse_color("#3366cc"), "15%")
        assert resolve(("brand", [("darken", ["15%"])]), brand_palette) == expected

    def test_nested_references(self, brand_palette):
        expected = darken(parse_color("#3366cc"), "10%")
        assert resolve("brand-dark", brand_palette) == expected
        assert resolve("button", brand_palette) == expected

    def test_mapping_entry(self, brand_palette):
        expected = lighten(parse_color("#3366cc"), "20%")
        assert resolve("focus", brand_palette) == expected

    def test_adjustments_on_top_of_adjusted_entry(self, brand_palette):
        expected = lighten(darken(parse_color("#3366cc"), "10%"), "5%")
        assert resolve(("brand-dark", [("lighten", ["5%"])]), brand_palette) == expected

    def test_nested_origin_description(self):
        inner = ("#000000", [("lighten", ["50%"])])
        assert resolve((inner, [("lighten", ["50%"])])) == Color(255, 255, 255)

    def test_alpha_preserved(self):
        assert resolve("veil", {"veil": "rgba(0, 0, 0, 0.25)"}).alpha == pytest.approx(0.25)

    def test_resolve_all(self, brand_palette):
        colors = resolve_all(["link", "text"], brand_palette)
        assert colors == {"link": Color(255, 0, 0), "text": Color(0x22, 0x22, 0x22)}


class TestAdjustmentChain:
    def test_applied_left_to_right(self):
        calls = []

        def step(tag):
            def f(color):
                calls.append(tag)
                return color
            f.__name__ = tag
            return f

        registry = AdjustmentRegistry()
        registry.register("first", step("first"))
        registry.register("second", step("second"))
        resolve(("#123456", [("second", []), ("first", []), ("second", [])]), registry=registry)
        assert calls == ["second", "first", "second"]

    def test_each_step_consumes_previous_output(self):
        # mix with white then grayscale differs from grayscale then mix
        a = resolve(("#ff0000", [("grayscale", []), ("mix", ["#0000ff", "50%"])]))
        b = resolve(("#ff0000", [("mix", ["#0000ff", "50%"]), ("grayscale", [])]))
        assert a != b

    def test_unknown_adjustment(self, brand_palette):
        with pytest.raises(UnknownAdjustmentFunction):
            resolve(("brand", [("sparkle", [])]), brand_palette)

    def test_unknown_adjustment_inside_palette(self):
        palette = {"x": ["#000000", [["sparkle", []]]]}
        with pytest.raises(UnknownAdjustmentFunction):
            resolve("x", palette)

    def test_malformed_palette_entry(self):
        with pytest.raises(InvalidColorDescription):
            resolve("x", {"x": ["#000000", "darken"]})


class TestCycles:
    def test_self_reference(self):
        with pytest.raises(CyclicColorReference) as exc_info:
            resolve("a", {"a": "a"})
        assert exc_info.value.chain == ("a", "a")

    def test_transitive_reference(self):
        palette = {"a": "b", "b": "c", "c": "a"}
        with pytest.raises(CyclicColorReference) as exc_info:
            resolve("a", palette)
        assert exc_info.value.chain == ("a", "b", "c", "a")
        assert "a -> b -> c -> a" in str(exc_info.value)

    def test_cycle_through_adjustments(self):
        palette = {"a": ["b", [["lighten", ["5%"]]]], "b": "a"}
        with pytest.raises(CyclicColorReference):
            resolve("a", palette)

    def test_cycle_reached_from_pair_origin(self):
        with pytest.raises(CyclicColorReference):
            resolve(("a", [("darken", ["5%"])]), {"a": ["a", [["darken", ["5%"]]]]})

    def test_shared_reference_is_not_a_cycle(self):
        palette = {"base": "#102030", "a": "base", "b": "a"}
        resolver = Resolver(palette)
        assert resolver.resolve("b") == resolver.resolve("base")
        # a second top-level call starts with a fresh chain
        assert resolver.resolve("b") == Color(0x10, 0x20, 0x30)


class TestResolverProperties:
    def test_palette_not_mutated(self, brand_palette):
        before = copy.deepcopy(brand_palette)
        for name in list(brand_palette):
            resolve(name, brand_palette)
        assert brand_palette == before

    def test_deterministic(self, brand_palette):
        assert resolve("focus", brand_palette) == resolve("focus", brand_palette)

    def test_default_registry(self):
        assert Resolver().registry is get_registry()

    def test_concurrent_resolution(self, brand_palette):
        resolver = Resolver(brand_palette)
        names = list(brand_palette) * 10
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(resolver.resolve, names))
        assert results == [resolver.resolve(n) for n in names]
