"""Base class for template layout strategies.

Provides the shared block builders and the strategy factory.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, List, Optional

from ..model import ResumeStructure
from ..normalizer import ascii_safe
from ..render_config import PageGeometry, Template, TemplateConfig
from .blocks import BODY, BULLET, HEADING, MAIN, RULE, Layout, LayoutBlock


class LayoutStrategy(ABC):
    """Turns a resume structure into positioned, styled blocks."""

    template: Template = Template.MODERN
    font_family = "sans"
    bullet_glyph = "•"
    ascii_only = False
    sizes: Dict[str, float] = {}

    def __init__(self, max_bullets: Optional[int] = None):
        self.max_bullets = max_bullets

    def layout(
        self,
        structure: ResumeStructure,
        config: TemplateConfig,
        geometry: Optional[PageGeometry] = None,
    ) -> Layout:
        """Pure function of its inputs; a new ``Layout`` per call."""
        geometry = geometry or PageGeometry.for_template(self.template)
        blocks = [self._text(b) for b in self._blocks(structure, geometry)]
        return self._assemble(structure, config, geometry, blocks)

    @abstractmethod
    def _blocks(self, structure: ResumeStructure, geometry: PageGeometry) -> List[LayoutBlock]:
        """Blocks in reading order. Subclasses must implement."""

    @abstractmethod
    def _assemble(
        self,
        structure: ResumeStructure,
        config: TemplateConfig,
        geometry: PageGeometry,
        blocks: List[LayoutBlock],
    ) -> Layout:
        """Wrap blocks with columns, fills and palette. Subclasses must implement."""

    # -------------------------------------------------------------------------
    # Block helpers
    # -------------------------------------------------------------------------

    def _text(self, block: LayoutBlock) -> LayoutBlock:
        if not self.ascii_only:
            return block
        return replace(
            block,
            text=ascii_safe(block.text),
            label=ascii_safe(block.label),
            detail=ascii_safe(block.detail),
        )

    def _bullets(self, achievements, region: str = MAIN, section: str = "experience",
                 size_class: str = "body", limit: bool = True):
        items = list(achievements)
        if limit and self.max_bullets is not None:
            items = items[: self.max_bullets]
        return [
            LayoutBlock(BULLET, text=a, region=region, size_class=size_class, indent=10.0, section=section)
            for a in items
        ]

    @staticmethod
    def _heading(text: str, region: str = MAIN, section: str = "", size_class: str = "heading",
                 color: str = "accent", space_before: float = 10.0) -> LayoutBlock:
        return LayoutBlock(
            HEADING,
            text=text,
            region=region,
            emphasis="bold",
            size_class=size_class,
            color=color,
            space_before=space_before,
            keep_with_next=True,
            section=section,
        )

    @staticmethod
    def _rule(region: str = MAIN, color: str = "accent", weight: float = 0.3, section: str = "") -> LayoutBlock:
        return LayoutBlock(RULE, region=region, color=color, weight=weight, section=section, keep_with_next=True)

    @staticmethod
    def _body(text: str, **kwargs) -> LayoutBlock:
        return LayoutBlock(BODY, text=text, **kwargs)

    @staticmethod
    def _contact_line(structure: ResumeStructure, sep: str = " | ") -> str:
        return sep.join(structure.contact.fields())

    def _document_title(self, structure: ResumeStructure) -> str:
        return f"{structure.name} - Resume" if structure.name else "Resume"


def get_strategy(template, max_bullets: Optional[int] = None) -> LayoutStrategy:
    """Factory for the layout strategy of a template.

    Examples:
        >>> get_strategy("modern").__class__.__name__
        'ModernLayout'
    """
    template = Template.parse(template)
    if template is Template.MODERN:
        from .modern import ModernLayout
        return ModernLayout(max_bullets=5 if max_bullets is None else max_bullets)
    if template is Template.TRADITIONAL:
        from .traditional import TraditionalLayout
        return TraditionalLayout(max_bullets=max_bullets)
    from .ats import ATSLayout
    return ATSLayout(max_bullets=max_bullets)
