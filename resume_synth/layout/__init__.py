"""Template layout strategies."""

from .base import LayoutStrategy, get_strategy
from .blocks import BODY, BULLET, FULL, HEADING, MAIN, RULE, SIDEBAR, Column, Fill, Layout, LayoutBlock

__all__ = [
    "BODY",
    "BULLET",
    "FULL",
    "HEADING",
    "MAIN",
    "RULE",
    "SIDEBAR",
    "Column",
    "Fill",
    "Layout",
    "LayoutBlock",
    "LayoutStrategy",
    "get_strategy",
]
