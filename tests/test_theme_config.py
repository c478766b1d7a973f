"""ThemeConfig parsing: defaults, lenient input, and lossless round-trips."""

import logging

import pytest
from pydantic import ValidationError

from storefront.theme.config import (
    DEFAULT_THEME,
    ThemeConfig,
    ThemeTokens,
    default_theme,
    dump_theme,
    load_theme,
)


def test_none_loads_default_theme():
    theme = load_theme(None)
    assert theme == DEFAULT_THEME
    assert [b.id for b in theme.layout_home] == ["hero-1", "products-1", "marquee-1"]
    assert [b.type for b in theme.layout_home] == ["hero_v1", "product_grid", "marquee"]
    assert theme.layout_product is None
    assert theme.layout_collection is None


def test_default_theme_is_a_fresh_copy():
    first = default_theme()
    assert first == DEFAULT_THEME
    assert first is not DEFAULT_THEME
    assert first.layout_home[0].props is not DEFAULT_THEME.layout_home[0].props


def test_default_tokens():
    tokens = ThemeTokens()
    assert tokens.primary == "#FE7501"
    assert tokens.background == "#08080A"
    assert tokens.font_display == "Sora"
    assert tokens.brand_gradient == ("#FE7501", "#B4160B")


def test_brand_gradient_prefers_explicit_stops():
    tokens = ThemeTokens(gradient_start="#111111", gradient_end="#222222")
    assert tokens.brand_gradient == ("#111111", "#222222")


def test_round_trip_preserves_all_fields():
    raw = {
        "tokens": {"primary": "#000000", "textMuted": "#999999", "fontDisplay": "Inter"},
        "layout_home": [
            {"id": "a", "type": "hero_v1", "props": {"title": "Hi", "ctaText": "Go"}},
            {"id": "b", "type": "retired_block", "props": {"anything": [1, 2]}},
        ],
        "layout_product": [{"id": "c", "type": "spacer", "props": {"height": 10}}],
        "layout_collection": None,
        "customKey": {"nested": True},
    }

    theme = load_theme(raw)
    dumped = dump_theme(theme)

    assert dumped["tokens"]["primary"] == "#000000"
    assert dumped["tokens"]["textMuted"] == "#999999"
    assert dumped["tokens"]["fontDisplay"] == "Inter"
    assert [b["id"] for b in dumped["layout_home"]] == ["a", "b"]
    assert dumped["layout_home"][0]["props"] == {"title": "Hi", "ctaText": "Go"}
    assert dumped["layout_home"][1]["props"] == {"anything": [1, 2]}
    assert dumped["layout_product"][0]["type"] == "spacer"
    assert dumped["layout_collection"] is None
    assert dumped["customKey"] == {"nested": True}
    assert load_theme(dumped) == theme


def test_tokens_accept_field_names_too():
    theme = load_theme({"tokens": {"text_muted": "#123456"}})
    assert theme.tokens.text_muted == "#123456"


def test_null_home_layout_becomes_empty():
    theme = load_theme({"layout_home": None})
    assert theme.layout_home == []


def test_malformed_blocks_are_dropped_or_defaulted():
    theme = load_theme(
        {
            "layout_home": [
                "junk",
                42,
                {"id": None, "type": "spacer", "props": "not-a-dict"},
                {"id": "ok", "type": "marquee"},
            ]
        }
    )
    assert len(theme.layout_home) == 2
    assert theme.layout_home[0].id == ""
    assert theme.layout_home[0].props == {}
    assert theme.layout_home[1].id == "ok"
    assert theme.layout_home[1].props == {}


def test_unparseable_theme_falls_back_to_default(caplog):
    with caplog.at_level(logging.WARNING, logger="storefront.theme.config"):
        theme = load_theme({"layout_home": "not-a-list"})
    assert theme == DEFAULT_THEME
    assert "using default" in caplog.text


def test_non_mapping_theme_falls_back_to_default():
    assert load_theme("not a theme") == DEFAULT_THEME
    assert load_theme([1, 2, 3]) == DEFAULT_THEME


def test_layout_for_page_kinds():
    theme = load_theme({"layout_product": [{"id": "p", "type": "spacer"}]})
    # A stored theme without layout_home has an empty home page, not the default one
    assert theme.layout_for("home") == []
    assert [b.id for b in theme.layout_for("product")] == ["p"]
    assert theme.layout_for("collection") == []
    assert theme.layout_for("checkout") == []


def test_themes_are_immutable():
    theme = default_theme()
    with pytest.raises(ValidationError):
        theme.tokens.primary = "#000000"
    with pytest.raises(ValidationError):
        theme.layout_home = []


def test_two_loads_never_share_state():
    raw = {"layout_home": [{"id": "a", "type": "spacer", "props": {"height": 1}}]}
    first = load_theme(raw)
    raw["layout_home"][0]["props"]["height"] = 99
    second = load_theme(raw)
    assert first.layout_home[0].props["height"] == 1
    assert second.layout_home[0].props["height"] == 99
    assert isinstance(first, ThemeConfig)


def test_malformed_children_stay_inside_their_block():
    theme = load_theme(
        {
            "layout_home": [
                {"id": "b1", "type": "image_banner", "props": {"backgroundImage": "x.jpg"}},
                {"id": "b2", "type": "product_grid", "children": "oops"},
                {
                    "id": "b3",
                    "type": "text_block",
                    "children": [1, {"id": "c1", "type": "spacer"}],
                },
            ]
        }
    )
    assert [b.id for b in theme.layout_home] == ["b1", "b2", "b3"]
    assert theme.layout_home[1].children is None
    assert [c.id for c in theme.layout_home[2].children] == ["c1"]


def test_bad_token_falls_back_alone():
    theme = load_theme(
        {
            "tokens": {"primary": None, "secondary": "#000000", "radius": 12},
            "layout_home": [{"id": "b1", "type": "spacer"}],
        }
    )
    assert [b.id for b in theme.layout_home] == ["b1"]
    assert theme.tokens.primary == "#FE7501"
    assert theme.tokens.secondary == "#000000"
    assert theme.tokens.radius == "12px"


def test_non_mapping_tokens_use_defaults_and_keep_layout():
    theme = load_theme({"tokens": "red", "layout_home": [{"id": "b1", "type": "marquee"}]})
    assert theme.tokens == ThemeTokens()
    assert [b.id for b in theme.layout_home] == ["b1"]
