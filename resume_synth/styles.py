"""Style semantics shared by the PDF and DOCX renderers.

Both renderers resolve fonts, colors and line heights through here so a
heading in the PDF and a heading in the DOCX get the same treatment.
"""
from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import Dict, Optional, Tuple

from .normalizer import ASCII_REPLACEMENTS

RGB = Tuple[int, int, int]

LEADING = 1.25

PDF_FONTS: Dict[str, Dict[Tuple[bool, bool], str]] = {
    "sans": {
        (False, False): "Helvetica",
        (True, False): "Helvetica-Bold",
        (False, True): "Helvetica-Oblique",
        (True, True): "Helvetica-BoldOblique",
    },
    "serif": {
        (False, False): "Times-Roman",
        (True, False): "Times-Bold",
        (False, True): "Times-Italic",
        (True, True): "Times-BoldItalic",
    },
}

DOCX_FONTS = {"sans": "Arial", "serif": "Times New Roman"}


@lru_cache(maxsize=256)
def parse_hex_color(hex_str: Optional[str]) -> Optional[RGB]:
    """Parse "#RRGGBB" or "RRGGBB" to an RGB tuple; None if invalid."""
    if not hex_str:
        return None
    v = hex_str.strip().lstrip("#")
    if len(v) != 6:
        return None
    try:
        return (int(v[0:2], 16), int(v[2:4], 16), int(v[4:6], 16))
    except ValueError:
        return None


def hex_fill(hex_str: str) -> str:
    """Upper-case hex without '#', as DOCX shading and color attributes expect."""
    rgb = parse_hex_color(hex_str)
    if rgb is None:
        raise ValueError(f"invalid color {hex_str!r}")
    r, g, b = rgb
    return f"{r:02X}{g:02X}{b:02X}"


def pdf_font(family: str, bold: bool = False, italic: bool = False) -> str:
    return PDF_FONTS.get(family, PDF_FONTS["sans"])[(bold, italic)]


def docx_font(family: str) -> str:
    return DOCX_FONTS.get(family, DOCX_FONTS["sans"])


def line_height(size: float) -> float:
    return size * LEADING


def pdf_safe(text: str) -> str:
    """Keep text inside the WinAnsi range the standard PDF fonts can draw."""
    out = []
    for ch in text or "":
        try:
            ch.encode("cp1252")
            out.append(ch)
            continue
        except UnicodeEncodeError:
            pass
        if ch in ASCII_REPLACEMENTS:
            out.append(ASCII_REPLACEMENTS[ch])
            continue
        folded = unicodedata.normalize("NFKD", ch).encode("cp1252", "ignore").decode("cp1252")
        out.append(folded or "?")
    return "".join(out)
