"""Heuristic field extractors for classified resume sections.

Each extractor takes the raw lines of one section and returns raw model
values; the structure builder normalizes them afterwards.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from .model import Contact, EducationEntry, ExperienceEntry
from .normalizer import clean_bullet, clean_markdown

EMAIL_RE = re.compile(r"[\w.+-]+@[\w.-]+\.\w+")
PHONE_RE = re.compile(r"\+?\(?\d[\d\s\-().]{8,}\d")
LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w-]+/?", re.I)
URL_RE = re.compile(
    r"(?:https?://\S+|www\.\S+|\b(?:github|gitlab)\.com/\S+|\b[\w-]+\.(?:dev|io|me|net|org|com)(?:/\S*)?)",
    re.I,
)
LOCATION_RE = re.compile(
    r"^(?:location:\s*)?([A-Z][\w.'-]*(?:\s[A-Z][\w.'-]*)*,\s*(?:[A-Z]{2}|[A-Z][a-z]+(?:\s[A-Z][a-z]+)*))$"
)

_MONTH = (
    r"(?:January|February|March|April|May|June|July|August|September|October|November|December"
    r"|Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec)\.?"
)
DATE_RANGE_RE = re.compile(
    rf"(?:{_MONTH}\s*)?\d{{4}}\s*(?:[-–—]|\bto\b)\s*(?:(?:{_MONTH}\s*)?\d{{4}}|Present|Current|Now)",
    re.I,
)
YEAR_RANGE_RE = re.compile(r"\d{4}\s*[-–—]\s*(?:\d{4}|Present|Current)", re.I)
SINGLE_YEAR_RE = re.compile(rf"(?:{_MONTH}\s*)?\b(?:19|20)\d{{2}}\b\s*$", re.I)
DEGREE_RE = re.compile(
    r"\b(?:bachelor|master|doctor|doctorate|ph\.?d|associate|diploma|certificate|mba|"
    r"b\.?sc|m\.?sc|b\.?s\.?|m\.?s\.?|b\.?a\.?|m\.?a\.?|b\.?eng|m\.?eng)\b",
    re.I,
)
CERTIFICATION_RE = re.compile(r"\(\d{4}\)\s*$")
TECH_KEYWORD_RE = re.compile(
    r"javascript|python|java|react|node|sql|html|css|typescript|c#|c\+\+|\.net|php|aws|azure|gcp|"
    r"docker|kubernetes|postgresql|mysql|mongodb|windows|linux|server|network|power bi|"
    r"virtualization|voip|active directory|exchange|git|excel|tableau|salesforce|figma|"
    r"django|flask|fastapi|spring|golang|\bgo\b|rust|swift|kotlin|terraform|ci/cd|api",
    re.I,
)
TECHNICAL_PREFIX_RE = re.compile(r"^technical\s*(?:skills)?\s*:\s*", re.I)
SOFT_PREFIX_RE = re.compile(r"^(?:professional|soft)\s*(?:skills?)?\s*:\s*", re.I)
LANGUAGES_PREFIX_RE = re.compile(r"^languages?\s*:\s*", re.I)
JOB_AT_RE = re.compile(r"^(.+?)\s+(?:at|@)\s+(.+)$", re.I)

PROSE_MIN_WORDS = 6


def _clean(line: str) -> str:
    return clean_markdown(line)


def _is_bullet(line: str) -> bool:
    return bool(re.match(r"^\s*[-•*]\s*", line)) and not line.lstrip().startswith("**")


def _split_items(text: str) -> List[str]:
    sep = r"[•]" if "•" in text else r"[,;]"
    return [p.strip() for p in re.split(sep, text) if len(p.strip()) > 1]


# -----------------------------------------------------------------------------
# Contact
# -----------------------------------------------------------------------------


def _looks_like_name(line: str) -> bool:
    return bool(line) and "@" not in line and not re.search(r"\d", line) and len(line.split()) <= 6


def extract_contact(header: List[str], contact: Optional[List[str]] = None) -> Tuple[str, Contact]:
    """Name from the first header line; contact fields from the rest."""
    lines = [_clean(ln) for ln in header or [] if _clean(ln)]
    name = ""
    rest = lines
    if lines:
        first = lines[0].split("|")[0].strip()
        if _looks_like_name(first):
            name = first
            rest = lines[1:]
    fields: Dict[str, str] = {"email": "", "phone": "", "location": "", "linkedin": "", "portfolio": ""}
    for line in list(rest) + [_clean(ln) for ln in contact or []]:
        for part in re.split(r"\s*[|•·]\s*", line):
            part = re.sub(r"^(?:email|e-mail|phone|tel|mobile|linkedin|portfolio|website)\s*:\s*", "", part, flags=re.I)
            if not part:
                continue
            m = EMAIL_RE.search(part)
            if m:
                fields["email"] = fields["email"] or m.group(0)
                continue
            m = LINKEDIN_RE.search(part)
            if m:
                fields["linkedin"] = fields["linkedin"] or m.group(0).rstrip("/")
                continue
            m = URL_RE.search(part)
            if m:
                fields["portfolio"] = fields["portfolio"] or m.group(0).rstrip("/")
                continue
            m = PHONE_RE.search(part)
            if m and len(re.sub(r"\D", "", m.group(0))) >= 7:
                fields["phone"] = fields["phone"] or m.group(0).strip()
                continue
            m = LOCATION_RE.match(part)
            if m:
                fields["location"] = fields["location"] or m.group(1)
    return name, Contact(**fields)


# -----------------------------------------------------------------------------
# Summary
# -----------------------------------------------------------------------------


def extract_summary(lines: List[str]) -> str:
    parts = [clean_bullet(_clean(ln)) for ln in lines or []]
    return re.sub(r"\s+", " ", " ".join(p for p in parts if p)).strip()


# -----------------------------------------------------------------------------
# Experience
# -----------------------------------------------------------------------------


def _split_company_location(text: str) -> Tuple[str, str]:
    if "," in text:
        comp, loc = text.split(",", 1)
        return comp.strip(), loc.strip()
    return text.strip(), ""


def _parse_job_line(line: str, pending_title: str) -> Dict[str, str]:
    m = DATE_RANGE_RE.search(line)
    period = re.sub(r"\s+", " ", m.group(0)).strip() if m else ""
    rest = DATE_RANGE_RE.sub("", line, count=1)
    rest = re.sub(r"\(\s*\)", "", rest)
    rest = rest.strip().strip("|").strip(" -–,").strip()
    title = ""
    if pending_title and rest.lower().startswith(pending_title.lower()):
        rest = rest[len(pending_title):].strip().lstrip("|,").strip()
        title = pending_title
    company = location = ""
    if "|" in rest:
        parts = [p.strip() for p in rest.split("|") if p.strip()]
        if not title and parts:
            if pending_title and parts[0].lower() == pending_title.lower():
                title = pending_title
                parts.pop(0)
            elif not pending_title:
                title = parts.pop(0)
        if parts:
            company, location = _split_company_location(parts[0])
            if not location and len(parts) > 1:
                location = parts[1]
    elif not pending_title and JOB_AT_RE.match(rest):
        at = JOB_AT_RE.match(rest)
        title = at.group(1).strip()
        company, location = _split_company_location(at.group(2))
    elif "," in rest:
        company, location = _split_company_location(rest)
    elif rest:
        if pending_title:
            company = rest
        else:
            title = rest
    if not title and pending_title:
        title = pending_title
    return {"title": title, "company": company, "location": location, "period": period}


def _is_prose(line: str) -> bool:
    """Description sentences under a job, as opposed to a title line."""
    return len(line.split()) > PROSE_MIN_WORDS or line.endswith(".")


def extract_experience(lines: List[str]) -> List[ExperienceEntry]:
    """Jobs are anchored on date-range lines; the line before may hold the title."""
    cleaned = [ln.strip() for ln in lines or [] if ln.strip()]
    jobs: List[ExperienceEntry] = []
    current: Optional[Dict[str, object]] = None
    pending_title = ""

    def flush() -> None:
        if current and (current["title"] or current["company"]):
            jobs.append(
                ExperienceEntry(
                    title=str(current["title"]),
                    company=str(current["company"]),
                    location=str(current["location"]),
                    period=str(current["period"]),
                    achievements=tuple(current["achievements"]),  # type: ignore[arg-type]
                )
            )

    for i, raw in enumerate(cleaned):
        bullet = _is_bullet(raw)
        line = _clean(raw)
        if not line:
            continue
        if bullet:
            if current is not None:
                current["achievements"].append(clean_bullet(line))  # type: ignore[union-attr]
            pending_title = ""
        elif DATE_RANGE_RE.search(line):
            flush()
            current = dict(_parse_job_line(line, pending_title))
            current["achievements"] = []
            pending_title = ""
        else:
            nxt = _clean(cleaned[i + 1]) if i + 1 < len(cleaned) else ""
            if current is not None and _is_prose(line):
                current["achievements"].append(line)  # type: ignore[union-attr]
            elif current is None or DATE_RANGE_RE.search(nxt):
                pending_title = line
            elif len(line.split()) > 4:
                current["achievements"].append(line)  # type: ignore[union-attr]
    flush()
    return jobs


# -----------------------------------------------------------------------------
# Education
# -----------------------------------------------------------------------------


def _take_period(text: str) -> Tuple[str, str]:
    m = DATE_RANGE_RE.search(text) or YEAR_RANGE_RE.search(text) or SINGLE_YEAR_RE.search(text)
    if not m:
        return text, ""
    rest = (text[: m.start()] + text[m.end():]).strip()
    rest = re.sub(r"\(\s*\)", "", rest).strip().strip("|,-– ").strip()
    return rest, re.sub(r"\s+", " ", m.group(0)).strip()


def extract_education(lines: List[str]) -> List[EducationEntry]:
    entries: List[EducationEntry] = []
    current: Optional[Dict[str, str]] = None

    def flush() -> None:
        if current and (current["degree"] or current["school"]):
            entries.append(EducationEntry(**current))

    for raw in lines or []:
        bullet = _is_bullet(raw)
        line = clean_bullet(_clean(raw)) if bullet else _clean(raw)
        if not line:
            continue
        if not bullet and DEGREE_RE.search(line):
            flush()
            degree, period = _take_period(line)
            school = ""
            parts = [p.strip() for p in degree.split("|") if p.strip()]
            if len(parts) > 1:
                degree, school = parts[0], parts[1]
            elif parts:
                degree = parts[0]
            if not school and " - " in degree:
                degree, school = [p.strip() for p in degree.split(" - ", 1)]
            current = {"degree": degree, "school": school, "period": period, "details": ""}
        elif current is None:
            continue
        elif not current["school"] and not bullet:
            school, period = _take_period(line)
            current["school"] = school
            if period and not current["period"]:
                current["period"] = period
        elif not current["period"] and (YEAR_RANGE_RE.search(line) or SINGLE_YEAR_RE.fullmatch(line)):
            current["period"] = _take_period(line)[1]
        else:
            current["details"] = "; ".join(p for p in (current["details"], line) if p)
    flush()
    return entries


# -----------------------------------------------------------------------------
# Skills, languages, certifications
# -----------------------------------------------------------------------------


def is_certification(text: str) -> bool:
    return bool(CERTIFICATION_RE.search(text or ""))


def extract_skills(lines: List[str]) -> Dict[str, List[str]]:
    """Split skills into technical, soft, languages and certifications."""
    out: Dict[str, List[str]] = {"technical": [], "soft": [], "languages": [], "certifications": []}
    group = ""
    for raw in lines or []:
        line = clean_bullet(_clean(raw))
        if not line:
            continue
        if TECHNICAL_PREFIX_RE.match(line):
            group, line = "technical", TECHNICAL_PREFIX_RE.sub("", line, count=1)
        elif SOFT_PREFIX_RE.match(line):
            group, line = "soft", SOFT_PREFIX_RE.sub("", line, count=1)
        elif LANGUAGES_PREFIX_RE.match(line):
            group, line = "languages", LANGUAGES_PREFIX_RE.sub("", line, count=1)
        if not line:
            continue
        items = _split_items(line) if ("•" in line or "," in line or ";" in line) else [line]
        for item in items:
            if is_certification(item):
                out["certifications"].append(item)
            elif group:
                out[group].append(item)
            elif len(item) < 80:
                out["technical" if TECH_KEYWORD_RE.search(item) else "soft"].append(item)
    return out


def extract_languages(lines: List[str]) -> List[str]:
    out: List[str] = []
    for raw in lines or []:
        line = LANGUAGES_PREFIX_RE.sub("", clean_bullet(_clean(raw)))
        if not line or line.lower() == "languages":
            continue
        if "," in line or "•" in line:
            out.extend(_split_items(line))
        elif "(" in line or len(line) < 30:
            out.append(line)
    return out


def extract_certifications(lines: List[str]) -> List[str]:
    out: List[str] = []
    for raw in lines or []:
        line = clean_bullet(_clean(raw))
        if not line or line.lower().rstrip(":") in {"certifications", "certificates"}:
            continue
        items = _split_items(line) if "•" in line else [line]
        out.extend(i for i in items if len(i) < 100)
    return out


def find_certifications(lines: List[str]) -> List[str]:
    """Lines anywhere in the text that end with a ``(YYYY)`` year."""
    out: List[str] = []
    for raw in lines or []:
        line = clean_bullet(_clean(raw))
        if is_certification(line) and 10 < len(line) < 100:
            out.append(line)
    return out
