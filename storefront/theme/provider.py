"""Request-scoped theme propagation.

``theme_scope`` seeds the active theme once per render; any code running
inside it (block renderers included) reads it with ``current_theme`` or
``current_tokens`` instead of having it threaded through every call. The
value lives in a ContextVar, so concurrent requests never observe each
other's theme.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar

from storefront.theme.config import ThemeConfig, ThemeTokens, load_theme

_active_theme: ContextVar[ThemeConfig | None] = ContextVar("active_theme", default=None)


class ThemeScopeError(LookupError):
    """Raised when the active theme is read outside of ``theme_scope``."""


@contextmanager
def theme_scope(raw_theme: ThemeConfig | Mapping | None) -> Iterator[ThemeConfig]:
    """Activate the theme built from ``raw_theme`` (default theme when ``None``)."""
    theme = load_theme(raw_theme)
    token = _active_theme.set(theme)
    try:
        yield theme
    finally:
        _active_theme.reset(token)


def current_theme() -> ThemeConfig:
    theme = _active_theme.get()
    if theme is None:
        raise ThemeScopeError("current_theme() called outside of theme_scope()")
    return theme


def current_tokens() -> ThemeTokens:
    return current_theme().tokens


def css_variables(tokens: ThemeTokens) -> dict[str, str]:
    """Project design tokens onto the CSS custom properties the storefront styles use."""
    start, end = tokens.brand_gradient
    return {
        "--theme-primary": tokens.primary,
        "--theme-secondary": tokens.secondary,
        "--theme-accent": tokens.accent,
        "--theme-background": tokens.background,
        "--theme-surface": tokens.surface,
        "--theme-text": tokens.text,
        "--theme-text-muted": tokens.text_muted,
        "--theme-gradient-start": start,
        "--theme-gradient-end": end,
        "--theme-font-display": tokens.font_display,
        "--theme-font-body": tokens.font_body,
        "--theme-radius": tokens.radius,
        "--theme-radius-lg": tokens.radius_lg,
        "--theme-radius-full": tokens.radius_full,
    }
