"""Line tokenizer for free-form resume text."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Union

BULLET_RE = re.compile(r"^[-•*]\s+")
MARKDOWN_HEADING_RE = re.compile(r"^#{1,6}\s*")
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")

MAX_CAPS_HEADING = 30
MAX_COLON_HEADING_WORDS = 4

# canonical section key per cleaned heading text
SECTION_SYNONYMS = {
    "summary": "summary",
    "professional summary": "summary",
    "career summary": "summary",
    "executive summary": "summary",
    "profile": "summary",
    "professional profile": "summary",
    "about": "summary",
    "about me": "summary",
    "objective": "summary",
    "career objective": "summary",
    "overview": "summary",
    "experience": "experience",
    "work experience": "experience",
    "professional experience": "experience",
    "relevant experience": "experience",
    "employment": "experience",
    "employment history": "experience",
    "work history": "experience",
    "career history": "experience",
    "education": "education",
    "education and training": "education",
    "academic background": "education",
    "academics": "education",
    "qualifications": "education",
    "academic qualifications": "education",
    "skills": "skills",
    "technical skills": "skills",
    "professional skills": "skills",
    "soft skills": "skills",
    "key skills": "skills",
    "core skills": "skills",
    "core competencies": "skills",
    "competencies": "skills",
    "skills and expertise": "skills",
    "areas of expertise": "skills",
    "expertise": "skills",
    "technical": "skills",
    "professional": "skills",
    "technologies": "skills",
    "tools and technologies": "skills",
    "technical proficiencies": "skills",
    "certifications": "certifications",
    "certificates": "certifications",
    "licenses": "certifications",
    "licenses and certifications": "certifications",
    "certifications and licenses": "certifications",
    "languages": "languages",
    "language skills": "languages",
    "contact": "contact",
    "contact information": "contact",
    "contact details": "contact",
    "personal information": "contact",
}

CANONICAL_SECTIONS = frozenset(SECTION_SYNONYMS.values())


@dataclass(frozen=True)
class Heading:
    """Candidate section boundary; ``kind`` is caps, colon or markdown."""

    text: str
    key: str
    kind: str

    @property
    def known(self) -> bool:
        return self.key in CANONICAL_SECTIONS


@dataclass(frozen=True)
class BulletLine:
    text: str


@dataclass(frozen=True)
class TextLine:
    text: str


Token = Union[Heading, BulletLine, TextLine]


def section_key(heading: str) -> str:
    """Map heading text to its canonical key, else the cleaned lower-case text."""
    s = (heading or "").lower().replace("&", " and ")
    s = re.sub(r"[^\w\s]", " ", s)
    s = re.sub(r"\s+", " ", s).strip()
    return SECTION_SYNONYMS.get(s, s)


def _unwrap(line: str) -> str:
    if len(line) > 4 and line.startswith("**") and line.endswith("**") and "**" not in line[2:-2]:
        return line[2:-2].strip()
    return line


def _is_all_caps(text: str) -> bool:
    letters = [c for c in text if c.isalpha()]
    return bool(letters) and not any(c.islower() for c in letters)


def _heading_kind(text: str, markdown: bool) -> str:
    if _is_all_caps(text) and len(text) < MAX_CAPS_HEADING and not YEAR_RE.search(text):
        return "caps"
    if text.endswith(":") and len(text[:-1].split()) <= MAX_COLON_HEADING_WORDS:
        return "colon"
    if markdown and section_key(text) in CANONICAL_SECTIONS:
        return "markdown"
    return ""


def tokenize_line(raw: str) -> Token | None:
    line = raw.replace("\t", " ").strip()
    if not line:
        return None
    if BULLET_RE.match(line):
        return BulletLine(line)
    markdown = bool(MARKDOWN_HEADING_RE.match(line)) and line.startswith("#")
    text = MARKDOWN_HEADING_RE.sub("", line) if markdown else line
    text = _unwrap(text)
    if not text:
        return None
    kind = _heading_kind(text, markdown)
    if kind:
        return Heading(text=text, key=section_key(text), kind=kind)
    return TextLine(text)


def tokenize(text: str) -> List[Token]:
    """Split text into tokens; blank lines are dropped."""
    normalized = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    tokens: List[Token] = []
    for raw in normalized.split("\n"):
        tok = tokenize_line(raw)
        if tok is not None:
            tokens.append(tok)
    return tokens
