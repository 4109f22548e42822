"""Helpers for AI-generated resume prose.

The prose is markdown-ish text: ``##`` headings, ``**Title**`` job lines and
dash bullets. Sidebar-only sections are stripped before job blocks are
searched so a skills list can never be mistaken for achievements.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .classifier import classify
from .extractors import extract_summary
from .normalizer import clean_markdown
from .tokenizer import CANONICAL_SECTIONS, Heading, section_key, tokenize_line

LOG = logging.getLogger(__name__)

SIDEBAR_SECTIONS = frozenset({"skills", "education", "certifications", "languages", "contact"})

JOB_NAME_LINE_RE = re.compile(r"^\*\*[A-Z][a-z]+\s+[A-Z]")
PROSE_BULLET_RE = re.compile(r"^[-•*]\s+")


def prose_section(line: str) -> Optional[str]:
    """Section key when ``line`` opens a prose section, else None.

    Only ``#`` headings, standalone ALL-CAPS headings and known section names
    (``Languages:``, ``**Skills**``) open sections; bold job lines such as
    ``**Education Program Manager**`` never do.
    """
    stripped = (line or "").strip()
    if not stripped:
        return None
    tok = tokenize_line(stripped)
    if isinstance(tok, Heading) and (tok.kind != "colon" or tok.known):
        return tok.key
    if stripped.startswith("#"):
        return section_key(clean_markdown(stripped))
    if stripped.startswith("**") and stripped.endswith("**"):
        key = section_key(clean_markdown(stripped))
        if key in CANONICAL_SECTIONS:
            return key
    return None


def strip_sidebar_sections(text: str) -> str:
    """Drop skills, education, certifications, languages and contact sections."""
    kept: List[str] = []
    skipping = False
    for line in (text or "").replace("\r\n", "\n").split("\n"):
        key = prose_section(line)
        if key is not None:
            skipping = key in SIDEBAR_SECTIONS
            if skipping:
                LOG.debug("Stripping sidebar section %r from prose", line.strip())
                continue
        if not skipping:
            kept.append(line)
    return "\n".join(kept)


def extract_prose_summary(text: str) -> str:
    """Text of the summary section of the prose, or ''."""
    if not text:
        return ""
    return extract_summary(classify(text).get("summary") or [])


def _is_section_heading(line: str) -> bool:
    tok = tokenize_line(line)
    return isinstance(tok, Heading) and tok.kind != "colon"


def _word_re(phrase: str) -> Optional[re.Pattern]:
    phrase = (phrase or "").strip()
    if not phrase:
        return None
    return re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", re.I)


@dataclass
class JobBlockMatch:
    """Result of locating one job inside the prose."""

    bullets: List[str] = field(default_factory=list)
    anchor: str = ""
    exact: bool = False
    ambiguous: bool = False


def find_job_block(
    text: str,
    company: str,
    title: str = "",
    other_companies: Sequence[str] = (),
) -> JobBlockMatch:
    """Locate the block describing ``company`` and return its raw bullet lines.

    An unambiguous line naming both company and title wins. Otherwise a single
    whole-word company line is used, unless another job's company contains
    this one or several lines name it; then the match is flagged ambiguous and
    carries no bullets.
    """
    company_re = _word_re(company)
    if company_re is None:
        return JobBlockMatch()
    title_re = _word_re(title)
    lines = [ln.strip() for ln in (text or "").replace("\r\n", "\n").split("\n")]

    # summary mentions of an employer are not job anchors
    anchors: List[int] = []
    section = ""
    for i, ln in enumerate(lines):
        key = prose_section(ln)
        if key is not None:
            section = key
        if section == "summary" or not ln or PROSE_BULLET_RE.match(ln):
            continue
        if company_re.search(clean_markdown(ln)):
            anchors.append(i)
    exact = [i for i in anchors if title_re is not None and title_re.search(clean_markdown(lines[i]))]

    others = [c for c in other_companies if c and c.strip().lower() != company.strip().lower()]
    overlapping = [c for c in others if company_re.search(c)]

    if len(exact) == 1:
        start = exact[0]
        is_exact = True
    elif len(anchors) == 1 and not overlapping:
        start = anchors[0]
        is_exact = False
    elif anchors:
        return JobBlockMatch(anchor=company, ambiguous=True)
    else:
        return JobBlockMatch()

    other_res = [r for r in (_word_re(c) for c in others) if r is not None]
    bullets: List[str] = []
    for ln in lines[start + 1:]:
        if not ln:
            continue
        if PROSE_BULLET_RE.match(ln):
            bullets.append(ln)
            continue
        if ln.startswith("#") or JOB_NAME_LINE_RE.match(ln) or _is_section_heading(ln):
            break
        plain = clean_markdown(ln)
        if any(r.search(plain) for r in other_res):
            break
    return JobBlockMatch(bullets=bullets, anchor=lines[start], exact=is_exact)
