"""Pure text normalizers applied to every value that reaches a layout.

Title casing, date formatting, bullet quality filtering and skill-term
normalization. Nothing here keeps state between calls.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from typing import Iterable, List

LOG = logging.getLogger(__name__)

CONNECTIVES = frozenset({"of", "in", "and", "the", "for", "to", "a", "an", "on", "at", "by", "with"})

ACRONYMS = frozenset({
    "it", "ict", "ceo", "cto", "cfo", "coo", "cio", "cmo", "vp", "svp", "evp",
    "mba", "hr", "ui", "ux", "api", "sql", "aws", "gcp", "mvp", "qa", "seo",
    "crm", "erp", "usa", "uk", "uae", "nyc", "ai", "ml", "bi", "pr", "ii", "iii", "iv",
})

SPECIAL_WORDS = {
    "linkedin": "LinkedIn",
    "github": "GitHub",
    "gitlab": "GitLab",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "phd": "PhD",
    "msc": "MSc",
    "bsc": "BSc",
    "iphone": "iPhone",
    "ios": "iOS",
    "macos": "macOS",
    "devops": "DevOps",
    "mcdonald's": "McDonald's",
}

TECH_TERMS = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "js": "JS",
    "sql": "SQL",
    "nosql": "NoSQL",
    "mysql": "MySQL",
    "postgresql": "PostgreSQL",
    "postgres": "Postgres",
    "mongodb": "MongoDB",
    "html": "HTML",
    "html5": "HTML5",
    "css": "CSS",
    "css3": "CSS3",
    "aws": "AWS",
    "gcp": "GCP",
    "api": "API",
    "apis": "APIs",
    "rest": "REST",
    "graphql": "GraphQL",
    "node.js": "Node.js",
    "nodejs": "Node.js",
    "node": "Node.js",
    "react.js": "React",
    "reactjs": "React",
    "vue.js": "Vue.js",
    "vuejs": "Vue.js",
    "next.js": "Next.js",
    "nextjs": "Next.js",
    "c++": "C++",
    "c#": "C#",
    ".net": ".NET",
    "php": "PHP",
    "ios": "iOS",
    "macos": "macOS",
    "ci/cd": "CI/CD",
    "devops": "DevOps",
    "github": "GitHub",
    "gitlab": "GitLab",
    "fastapi": "FastAPI",
    "numpy": "NumPy",
    "scikit-learn": "scikit-learn",
    "pytorch": "PyTorch",
    "tensorflow": "TensorFlow",
    "ml": "ML",
    "ai": "AI",
    "seo": "SEO",
    "crm": "CRM",
    "erp": "ERP",
    "ui/ux": "UI/UX",
    "saas": "SaaS",
}

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

_MONTH_PATTERN = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
MONTH_YEAR_RE = re.compile(rf"^{_MONTH_PATTERN}\.?,?\s+\d{{4}}$", re.I)
YEAR_RE = re.compile(r"^\d{4}$")
ISO_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})(?:-\d{1,2})?$")
PRESENT_ONLY_RE = re.compile(r"^[-–—]\s*(present|current)\.?$", re.I)
ROLE_SUFFIX_RE = re.compile(
    r"\b(manager|engineer|developer|director|analyst|designer|consultant|specialist|"
    r"coordinator|lead|officer|assistant|intern|architect|administrator|associate|"
    r"executive|supervisor|representative)s?$",
    re.I,
)
BULLET_MARKER_RE = re.compile(r"^\s*(?:[-•*●◦▪–]|\d+[.)])\s*")
PRESENT_WORDS = frozenset({"present", "current", "now", "to date", "today", "ongoing"})

MIN_BULLET_LENGTH = 20
TITLE_FRAGMENT_LENGTH = 30

_EDGE_PUNCT_RE = re.compile(r"^(\W*)(.*?)(\W*)$", re.S)


# -----------------------------------------------------------------------------
# Title casing
# -----------------------------------------------------------------------------


def _capitalize(core: str) -> str:
    head = core[0].upper()
    if len(head) != 1:
        head = core[0]
    return head + core[1:].lower()


def _normalize_token(token: str, first: bool) -> str:
    m = _EDGE_PUNCT_RE.match(token)
    lead, core, trail = m.group(1), m.group(2), m.group(3)
    if not core:
        return token
    low = core.lower()
    if low in SPECIAL_WORDS:
        core = SPECIAL_WORDS[low]
    elif low in ACRONYMS:
        core = core.upper()
    elif "." in core and _is_upper_token(core):
        # dotted abbreviations (B.S., U.S.) keep their capitals
        return token
    elif not first and low in CONNECTIVES:
        core = low
    else:
        core = _capitalize(core)
    return f"{lead}{core}{trail}"


def _normalize_word(word: str, first: bool) -> str:
    if "-" not in word.strip("-"):
        return _normalize_token(word, first)
    parts = word.split("-")
    return "-".join(_normalize_token(p, first and i == 0) if p else p for i, p in enumerate(parts))


def normalize_title(text: str) -> str:
    """Title-case names, job titles, companies, degrees and places.

    Connectives stay lower-case unless first, acronyms are upper-cased and
    brand spellings come from ``SPECIAL_WORDS``. Applying it twice gives the
    same result as applying it once.
    """
    words = (text or "").split()
    return " ".join(_normalize_word(w, i == 0) for i, w in enumerate(words))


def _is_upper_token(word: str) -> bool:
    letters = [c for c in word if c.isalpha()]
    return bool(letters) and all(c.isupper() for c in letters)


def normalize_org(text: str) -> str:
    """Title-case a company or school name, keeping brand spellings.

    Mixed-case tokens (PayPal, eBay) and short upper-case tokens (IBM, MIT)
    are kept unless the whole name is shouted in capitals.
    """
    words = (text or "").split()
    shouted = len(words) > 1 and all(_is_upper_token(w) for w in words if any(c.isalpha() for c in w))
    out = []
    for i, w in enumerate(words):
        letters = [c for c in w if c.isalpha()]
        mixed = any(c.isupper() for c in letters[1:]) and any(c.islower() for c in letters)
        if mixed or (not shouted and _is_upper_token(w) and len(letters) <= 4):
            out.append(w)
        else:
            out.append(_normalize_word(w, i == 0))
    return " ".join(out)


def normalize_place(text: str) -> str:
    """Title-case a location; state and country codes stay upper-case."""
    parts = [p.strip() for p in (text or "").split(",")]
    out = []
    last = len(parts) - 1
    for idx, p in enumerate(parts):
        if re.fullmatch(r"[A-Za-z]{2,3}", p) and (p.isupper() or (idx == last > 0 and len(p) == 2)):
            out.append(p.upper())
        else:
            out.append(normalize_title(p))
    return ", ".join(p for p in out if p)


# -----------------------------------------------------------------------------
# Dates
# -----------------------------------------------------------------------------


def format_month_year(value: str) -> str:
    """``2023-06`` -> ``June 2023``; other values pass through stripped."""
    v = (value or "").strip()
    if not v:
        return ""
    if v.lower() in PRESENT_WORDS:
        return "Present"
    m = ISO_MONTH_RE.match(v)
    if m:
        month = int(m.group(2))
        if 1 <= month <= 12:
            return f"{MONTH_NAMES[month - 1]} {m.group(1)}"
    return v


def format_period(start: str, end: str, current: bool = False) -> str:
    s = format_month_year(start)
    e = "Present" if current else format_month_year(end)
    if s and e:
        return f"{s} - {e}"
    return s or e


def normalize_period(text: str) -> str:
    """Normalize dash variants and current-flags in an already formatted period."""
    v = re.sub(r"\s+", " ", (text or "").strip())
    if not v:
        return ""
    v = re.sub(r"\s+to\s+(?=(?:present|current|now|\d{4}|" + _MONTH_PATTERN + r"))", " - ", v, flags=re.I)
    v = re.sub(r"\s*[–—−]\s*|\s+-\s*|\s*-\s+", " - ", v)
    v = re.sub(r"(?<=\b\d{4})-(?=\d{4}\b|[A-Za-z])", " - ", v)
    v = re.sub(r"\b(?:present|current|now|ongoing)\b|\bto date\b", "Present", v, flags=re.I)
    return v.strip(" -")


# -----------------------------------------------------------------------------
# Bullets
# -----------------------------------------------------------------------------


def clean_markdown(text: str) -> str:
    """Strip inline markdown emphasis, heading markers and code ticks."""
    s = re.sub(r"^\s*#{1,6}\s*", "", text or "")
    s = s.replace("**", "").replace("__", "").replace("`", "")
    return re.sub(r"\s+", " ", s).strip()


def clean_bullet(text: str) -> str:
    """Remove a leading bullet marker and collapse whitespace."""
    s = BULLET_MARKER_RE.sub("", text or "", count=1)
    return re.sub(r"\s+", " ", s).strip()


def _looks_like_title_fragment(text: str) -> bool:
    if len(text) >= TITLE_FRAGMENT_LENGTH or not ROLE_SUFFIX_RE.search(text):
        return False
    words = [w for w in re.split(r"[\s/,&-]+", text) if w]
    return all(w[0].isupper() or w.lower() in CONNECTIVES for w in words if w[0].isalpha())


def is_quality_bullet(text: str) -> bool:
    """True when a line is a real achievement rather than a parsing artifact."""
    s = (text or "").strip()
    if len(s) < MIN_BULLET_LENGTH:
        return False
    if "**" in s:
        return False
    if MONTH_YEAR_RE.match(s) or YEAR_RE.match(s) or PRESENT_ONLY_RE.match(s):
        return False
    if _looks_like_title_fragment(s):
        return False
    return True


def filter_bullets(lines: Iterable[str]) -> List[str]:
    """Strip markers and keep quality bullets in input order."""
    out: List[str] = []
    for raw in lines or ():
        s = clean_bullet(raw)
        if not s:
            continue
        if is_quality_bullet(s):
            out.append(s)
        else:
            LOG.debug("Dropping bullet %r", s)
    return out


# -----------------------------------------------------------------------------
# Skills and job titles
# -----------------------------------------------------------------------------


def normalize_skill(term: str) -> str:
    s = re.sub(r"\s+", " ", (term or "").strip()).strip(" .;,")
    if not s:
        return ""
    canon = TECH_TERMS.get(s.lower())
    if canon:
        return canon
    # mixed-case brand names (PyTorch, jQuery) are kept as written
    if any(c.isupper() for c in s[1:]) and any(c.islower() for c in s):
        return s
    return normalize_title(s)


def clean_job_title(title: str, company: str = "") -> str:
    """Drop a repeated company name, doubled halves and repeated words."""
    words = (title or "").split()
    half = len(words) // 2
    if words and len(words) % 2 == 0 and [w.lower() for w in words[:half]] == [w.lower() for w in words[half:]]:
        words = words[:half]
    text = " ".join(words)
    if company and company.strip() and text.lower() != company.strip().lower():
        text = re.sub(rf"\s*(?:\bat\b|@|[-|,])?\s*\b{re.escape(company.strip())}\b\s*", " ", text, flags=re.I)
    deduped: List[str] = []
    for w in text.split():
        if deduped and deduped[-1].lower() == w.lower():
            continue
        deduped.append(w)
    return " ".join(deduped).strip(" -|,")


# -----------------------------------------------------------------------------
# Glyph folding
# -----------------------------------------------------------------------------

ASCII_REPLACEMENTS = {
    "•": "-",
    "●": "-",
    "◦": "-",
    "–": "-",
    "—": "-",
    "−": "-",
    "’": "'",
    "‘": "'",
    "“": '"',
    "”": '"',
    "…": "...",
    "\u00a0": " ",
    "\u200b": "",
    "·": "-",
}


def ascii_safe(text: str) -> str:
    """Fold typographic glyphs and accents to plain ASCII."""
    s = text or ""
    for src, dst in ASCII_REPLACEMENTS.items():
        s = s.replace(src, dst)
    s = unicodedata.normalize("NFKD", s)
    return s.encode("ascii", "ignore").decode("ascii")
