"""Vibe presets: named partial token sets applied on top of a theme."""

from dataclasses import dataclass, field

from storefront.core.exceptions import UnknownPresetError
from storefront.theme.config import ThemeConfig


@dataclass(frozen=True)
class VibePreset:
    id: str
    name: str
    description: str
    preview: str
    tokens: dict[str, str] = field(default_factory=dict)


VIBE_PRESETS: tuple[VibePreset, ...] = (
    VibePreset(
        id="volcanic-luxe",
        name="Volcanic Luxe",
        description="Sophisticated darkness with lava accents",
        preview="/vibes/volcanic-luxe.png",
        tokens={
            "primary": "#FE7501",
            "secondary": "#B4160B",
            "accent": "#FFE946",
            "background": "#08080A",
            "surface": "#121216",
        },
    ),
    VibePreset(
        id="cyber-orchid",
        name="Cyber Orchid",
        description="Futuristic purple and deep violet",
        preview="/vibes/cyber-orchid.png",
        tokens={
            "primary": "#D400FF",
            "secondary": "#6A00FF",
            "accent": "#00F0FF",
            "background": "#0A0515",
            "surface": "#180C2E",
        },
    ),
    VibePreset(
        id="emerald-night",
        name="Emerald Night",
        description="Deep forest greens and gold",
        preview="/vibes/emerald-night.png",
        tokens={
            "primary": "#10B981",
            "secondary": "#065F46",
            "accent": "#FBBF24",
            "background": "#050A08",
            "surface": "#0D1A14",
        },
    ),
    VibePreset(
        id="minimal-luxury",
        name="Minimal Luxury",
        description="Clean whites with gold accents",
        preview="/vibes/minimal-luxury.png",
        tokens={
            "primary": "#C9A962",
            "secondary": "#8B7355",
            "accent": "#FFFFFF",
            "background": "#FAFAFA",
            "text": "#1A1A1A",
            "text_muted": "rgba(0,0,0,0.6)",
        },
    ),
    VibePreset(
        id="forest-earth",
        name="Forest Earth",
        description="Natural greens and earthy tones",
        preview="/vibes/forest-earth.png",
        tokens={
            "primary": "#2D5A27",
            "secondary": "#8B4513",
            "accent": "#DAA520",
            "background": "#1A1A14",
        },
    ),
)

_PRESETS_BY_ID = {preset.id: preset for preset in VIBE_PRESETS}


def get_preset(preset_id: str) -> VibePreset:
    try:
        return _PRESETS_BY_ID[preset_id]
    except KeyError:
        raise UnknownPresetError(preset_id) from None


def apply_vibe(theme: ThemeConfig, preset_id: str) -> ThemeConfig:
    """Return a copy of ``theme`` with the preset's tokens merged in. Layouts are untouched."""
    preset = get_preset(preset_id)
    tokens = theme.tokens.model_copy(update=preset.tokens)
    return theme.model_copy(update={"tokens": tokens}, deep=True)
