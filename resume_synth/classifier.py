"""Section classifier: a small state machine over line tokens.

Produces a ``RawSectionMap`` (lower-case section key -> raw lines, insertion
ordered). Lines before the first section boundary land in ``header``.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List

from .tokenizer import CANONICAL_SECTIONS, Heading, Token, tokenize

LOG = logging.getLogger(__name__)

RawSectionMap = Dict[str, List[str]]

HEADER = "header"

_CONTACT_LIKE_RE = re.compile(r"[@|,\d]")


class SectionClassifier:
    """Feed tokens one at a time; ``sections`` holds the result."""

    def __init__(self) -> None:
        self.sections: RawSectionMap = {HEADER: []}
        self.current = HEADER

    def _append(self, line: str) -> None:
        self.sections.setdefault(self.current, []).append(line)

    def _is_boundary(self, tok: Heading) -> bool:
        if self.current == HEADER:
            if tok.known:
                return True
            # the name line and ALL-CAPS contact lines stay in the header
            header = self.sections[HEADER]
            return tok.kind == "caps" and bool(header) and not _CONTACT_LIKE_RE.search(tok.text)
        if tok.key == self.current:
            return False
        if tok.kind == "colon" and not tok.known and self.current in CANONICAL_SECTIONS:
            return False
        return True

    def feed(self, tok: Token) -> None:
        if isinstance(tok, Heading):
            if self._is_boundary(tok):
                self.current = tok.key
                self.sections.setdefault(self.current, [])
                LOG.debug("Section boundary %r -> %s", tok.text, tok.key)
                return
            self._append(tok.text)
            return
        self._append(tok.text)

    def result(self) -> RawSectionMap:
        out: RawSectionMap = {}
        for key, lines in self.sections.items():
            if key == HEADER and not lines:
                continue
            out[key] = list(lines)
        return out


def classify(text: str) -> RawSectionMap:
    """Split free-form resume text into raw sections.

    Text without any recognizable boundary comes back as a single
    ``header`` section.
    """
    machine = SectionClassifier()
    for tok in tokenize(text):
        machine.feed(tok)
    return machine.result()
