"""UI theme definitions and selection helpers.

Themes are ANSI palettes for box chrome, list rows, and the progress bar.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    border: str
    title: str
    directory: str
    file: str
    unselectable: str
    size: str
    progress_bar: str
    hint: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[38;5;44m",
    title="\033[1;38;5;81m",
    directory="\033[1;34m",
    file="\033[38;5;252m",
    unselectable="\033[2;38;5;250m",
    size="\033[38;5;109m",
    progress_bar="\033[38;5;42m",
    hint="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[38;5;39m",
    title="\033[1;38;5;45m",
    directory="\033[1;38;5;45m",
    file="\033[38;5;252m",
    unselectable="\033[2;38;5;110m",
    size="\033[38;5;73m",
    progress_bar="\033[38;5;117m",
    hint="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    border="",
    title="",
    directory="",
    file="",
    unselectable="",
    size="",
    progress_bar="",
    hint="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
