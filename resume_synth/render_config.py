"""Template, color and page configuration for rendering.

Groups the options both renderers share so layout strategies take a small
number of parameters.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .errors import ConfigError
from .io_utils import load_config

LOG = logging.getLogger(__name__)

MM = 72.0 / 25.4

PAGE_SIZES: Dict[str, tuple] = {
    "a4": (595.28, 841.89),
    "letter": (612.0, 792.0),
}

BODY_TEXT = "#1f2937"
MUTED_TEXT = "#646464"
BLACK = "#000000"


class Template(str, Enum):
    MODERN = "modern"
    TRADITIONAL = "traditional"
    ATS = "ats"

    @property
    def display_name(self) -> str:
        return "ATS" if self is Template.ATS else self.value.capitalize()

    @classmethod
    def parse(cls, value: Any) -> "Template":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            raise ConfigError(
                f"Unknown template: {value!r}",
                hint="Use one of: " + ", ".join(t.value for t in cls),
            ) from None


class ColorPreset(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    RED = "red"
    TEAL = "teal"
    ORANGE = "orange"

    @classmethod
    def parse(cls, value: Any) -> "ColorPreset":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            raise ConfigError(
                f"Unknown color preset: {value!r}",
                hint="Use one of: " + ", ".join(c.value for c in cls),
            ) from None


# primary (accent) and light (sidebar tint) per preset
COLOR_PRESETS: Dict[ColorPreset, Dict[str, str]] = {
    ColorPreset.BLUE: {"primary": "#2563eb", "light": "#eff6ff"},
    ColorPreset.GREEN: {"primary": "#16a34a", "light": "#f0fdf4"},
    ColorPreset.PURPLE: {"primary": "#9333ea", "light": "#faf5ff"},
    ColorPreset.RED: {"primary": "#dc2626", "light": "#fef2f2"},
    ColorPreset.TEAL: {"primary": "#0d9488", "light": "#f0fdfa"},
    ColorPreset.ORANGE: {"primary": "#ea580c", "light": "#fff7ed"},
}


@dataclass(frozen=True)
class Palette:
    """Hex colors by role; ``light`` is empty when there is no tint."""

    accent: str = BLACK
    body: str = BODY_TEXT
    muted: str = MUTED_TEXT
    light: str = ""

    def resolve(self, role: str) -> str:
        if role == "accent":
            return self.accent
        if role == "muted":
            return self.muted
        if role == "light":
            return self.light
        return self.body


@dataclass(frozen=True)
class TemplateConfig:
    template: Template = Template.MODERN
    color: ColorPreset = ColorPreset.BLUE

    @classmethod
    def of(cls, template: Any = "modern", color: Any = "blue") -> "TemplateConfig":
        return cls(template=Template.parse(template), color=ColorPreset.parse(color))

    def palette(self) -> Palette:
        """Preset palette for Modern; monochrome for the other templates."""
        if self.template is Template.MODERN:
            preset = COLOR_PRESETS[self.color]
            return Palette(accent=preset["primary"], light=preset["light"])
        return Palette(accent=BLACK, body=BLACK if self.template is Template.ATS else BODY_TEXT)


@dataclass(frozen=True)
class PageGeometry:
    """Page size and margins in points."""

    width: float = PAGE_SIZES["a4"][0]
    height: float = PAGE_SIZES["a4"][1]
    top: float = 15 * MM
    bottom: float = 15 * MM
    left: float = 15 * MM
    right: float = 15 * MM

    @property
    def content_width(self) -> float:
        return self.width - self.left - self.right

    @classmethod
    def for_template(
        cls,
        template: Template,
        page_size: str = "a4",
        margin: Optional[float] = None,
    ) -> "PageGeometry":
        size = PAGE_SIZES.get((page_size or "a4").lower())
        if size is None:
            raise ConfigError(f"Unknown page size: {page_size!r}", hint="Use a4 or letter")
        if margin is None:
            margin = {
                Template.MODERN: 15 * MM,
                Template.TRADITIONAL: 20 * MM,
                Template.ATS: 18 * MM,
            }[template]
        return cls(width=size[0], height=size[1], top=margin, bottom=margin, left=margin, right=margin)


@dataclass
class EngineSettings:
    """Engine-wide rendering options, optionally loaded from YAML."""

    page_size: str = "a4"
    margin_mm: Optional[float] = None
    modern_max_bullets: int = 5
    compress_pdf: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def geometry(self, template: Template) -> PageGeometry:
        margin = self.margin_mm * MM if self.margin_mm is not None else None
        return PageGeometry.for_template(template, self.page_size, margin)


def load_settings(path: Optional[str | os.PathLike[str]]) -> EngineSettings:
    """Load settings from a YAML file; missing file yields defaults."""
    try:
        data = load_config(path)
    except Exception as exc:
        raise ConfigError(f"Could not read settings {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    settings = EngineSettings()
    known = {"page_size", "margin_mm", "modern_max_bullets", "compress_pdf"}
    page_size = str(data.get("page_size", settings.page_size)).lower()
    if page_size not in PAGE_SIZES:
        raise ConfigError(f"Unknown page size in settings: {page_size!r}", hint="Use a4 or letter")
    settings.page_size = page_size
    try:
        if data.get("margin_mm") is not None:
            settings.margin_mm = float(data["margin_mm"])
        settings.modern_max_bullets = int(data.get("modern_max_bullets", settings.modern_max_bullets))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid numeric value in settings {path}: {exc}") from exc
    if settings.modern_max_bullets < 1:
        raise ConfigError("modern_max_bullets must be at least 1")
    settings.compress_pdf = bool(data.get("compress_pdf", settings.compress_pdf))
    settings.extra = {k: v for k, v in data.items() if k not in known}
    if settings.extra:
        LOG.debug("Ignoring unknown settings keys: %s", ", ".join(sorted(settings.extra)))
    return settings
