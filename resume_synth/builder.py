"""Build a normalized ``ResumeStructure`` from form data or free-form text.

Two entry points:

- ``build_from_form``: structured fields filled in by a user, optionally
  enriched with AI-generated prose (bullets and summary).
- ``build_from_text``: free-form resume text, split by the section
  classifier and mapped field by field through the extractors.

Every value passes through the normalizers before it reaches the structure.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .classifier import HEADER, classify
from .extractors import (
    extract_certifications,
    extract_contact,
    extract_education,
    extract_experience,
    extract_languages,
    extract_skills,
    extract_summary,
    find_certifications,
    is_certification,
)
from .model import Contact, EducationEntry, ExperienceEntry, ResumeStructure, Skills
from .normalizer import (
    MONTH_NAMES,
    clean_job_title,
    filter_bullets,
    format_period,
    normalize_org,
    normalize_period,
    normalize_place,
    normalize_skill,
    normalize_title,
)
from .prose import extract_prose_summary, find_job_block, strip_sidebar_sections
from .providers import ProviderChain

LOG = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Form data
# -----------------------------------------------------------------------------


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _str(data: Mapping[str, Any], *keys: str) -> str:
    value = _pick(data, *keys)
    return "" if value is None else str(value).strip()


def _str_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [p.strip() for p in value.split(",") if p.strip()]
    return [str(v).strip() for v in value if str(v or "").strip()]


@dataclass
class FormExperience:
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FormExperience":
        return cls(
            title=_str(data, "title"),
            company=_str(data, "company"),
            location=_str(data, "location"),
            start_date=_str(data, "start_date", "startDate"),
            end_date=_str(data, "end_date", "endDate"),
            current=bool(_pick(data, "current")),
            description=_str(data, "description"),
        )


@dataclass
class FormEducation:
    school: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    gpa: str = ""
    highlights: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FormEducation":
        return cls(
            school=_str(data, "school"),
            degree=_str(data, "degree"),
            field=_str(data, "field"),
            start_date=_str(data, "start_date", "startDate"),
            end_date=_str(data, "end_date", "endDate"),
            current=bool(_pick(data, "current")),
            gpa=_str(data, "gpa"),
            highlights=_str(data, "highlights"),
        )


@dataclass
class FormData:
    """Fields of the resume builder form (snake_case or camelCase keys)."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    portfolio: str = ""
    target_job_title: str = ""
    target_industry: str = ""
    experience_level: str = ""
    summary: str = ""
    experience: List[FormExperience] = field(default_factory=list)
    education: List[FormEducation] = field(default_factory=list)
    technical_skills: List[str] = field(default_factory=list)
    soft_skills: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FormData":
        data = data or {}
        skills = data.get("skills") or {}
        if not isinstance(skills, Mapping):
            skills = {"technical": skills}
        return cls(
            full_name=_str(data, "full_name", "fullName", "name"),
            email=_str(data, "email"),
            phone=_str(data, "phone"),
            location=_str(data, "location"),
            linkedin=_str(data, "linkedin"),
            portfolio=_str(data, "portfolio"),
            target_job_title=_str(data, "target_job_title", "targetJobTitle"),
            target_industry=_str(data, "target_industry", "targetIndustry"),
            experience_level=_str(data, "experience_level", "experienceLevel"),
            summary=_str(data, "summary"),
            experience=[FormExperience.from_dict(e) for e in data.get("experience") or [] if isinstance(e, Mapping)],
            education=[FormEducation.from_dict(e) for e in data.get("education") or [] if isinstance(e, Mapping)],
            technical_skills=_str_list(skills.get("technical")),
            soft_skills=_str_list(skills.get("soft")),
            languages=_str_list(skills.get("languages")),
            certifications=_str_list(skills.get("certifications")),
        )


# -----------------------------------------------------------------------------
# Date arithmetic
# -----------------------------------------------------------------------------

_MONTH_LOOKUP = {name[:3].lower(): i + 1 for i, name in enumerate(MONTH_NAMES)}


def parse_month(value: str) -> Optional[Tuple[int, int]]:
    """``(year, month)`` from ``YYYY-MM``, ``Month YYYY`` or ``YYYY``."""
    v = (value or "").strip()
    m = re.match(r"^(\d{4})-(\d{1,2})", v)
    if m and 1 <= int(m.group(2)) <= 12:
        return int(m.group(1)), int(m.group(2))
    m = re.match(r"^([A-Za-z]{3})[a-z]*\.?,?\s+(\d{4})$", v)
    if m and m.group(1).lower() in _MONTH_LOOKUP:
        return int(m.group(2)), _MONTH_LOOKUP[m.group(1).lower()]
    m = re.match(r"^(\d{4})$", v)
    if m:
        return int(m.group(1)), 1
    return None


def months_between(start: str, end: str, current: bool, today: date) -> int:
    s = parse_month(start)
    e = (today.year, today.month) if current or not end else parse_month(end)
    if not s or not e:
        return 0
    return max(0, (e[0] - s[0]) * 12 + (e[1] - s[1]))


def years_of_experience(jobs: Sequence[FormExperience], today: date) -> int:
    total = sum(months_between(j.start_date, j.end_date, j.current, today) for j in jobs)
    return total // 12


def synthesize_summary(role: str, years: int, industry: str) -> str:
    role = normalize_title(role)
    industry = (industry or "").strip()
    if not role and not years:
        return ""
    lead = f"Results-driven {role or 'professional'}"
    if years >= 1:
        lead += f" with {years}+ year{'s' if years != 1 else ''} of experience"
    if industry:
        lead += f" in the {industry} industry"
    return lead + ", focused on delivering measurable impact and continuous improvement."


def split_description(text: str) -> List[str]:
    """Split a free-text job description on newlines and sentence ends."""
    parts: List[str] = []
    for line in (text or "").replace("\r\n", "\n").split("\n"):
        for sentence in re.split(r"(?<=[.!?])\s+", line.strip()):
            s = sentence.strip().rstrip(".").strip()
            if s:
                parts.append(s)
    return parts


# -----------------------------------------------------------------------------
# Builder
# -----------------------------------------------------------------------------


class StructureBuilder:
    """Assembles a ``ResumeStructure``; ``warnings`` collects non-fatal findings."""

    def __init__(self, today: Optional[date] = None):
        self.today = today or date.today()
        self.warnings: List[str] = []

    def _warn(self, message: str) -> None:
        LOG.warning(message)
        self.warnings.append(message)

    # -------------------------------------------------------------------------
    # Shared normalization
    # -------------------------------------------------------------------------

    def normalize_experience(self, entry: ExperienceEntry) -> ExperienceEntry:
        company = normalize_org(entry.company)
        return ExperienceEntry(
            title=normalize_title(clean_job_title(entry.title, entry.company)),
            company=company,
            location=normalize_place(entry.location),
            period=normalize_period(entry.period),
            achievements=tuple(filter_bullets(entry.achievements)),
        )

    def normalize_education(self, entry: EducationEntry) -> EducationEntry:
        return EducationEntry(
            degree=normalize_title(entry.degree),
            school=normalize_org(entry.school),
            period=normalize_period(entry.period),
            details=re.sub(r"\s+", " ", entry.details).strip(),
        )

    @staticmethod
    def normalize_skills(technical, soft, languages, certifications) -> Skills:
        certs = [c for c in certifications if c]
        return Skills(
            technical=tuple(normalize_skill(s) for s in technical if not is_certification(s)),
            soft=tuple(normalize_skill(s) for s in soft if not is_certification(s)),
            languages=tuple(normalize_title(s) for s in languages),
            certifications=tuple(re.sub(r"\s+", " ", c).strip() for c in certs),
        )

    # -------------------------------------------------------------------------
    # From form
    # -------------------------------------------------------------------------

    def _ai_bullets(self, prose: str, job: FormExperience, companies: List[str]) -> List[str]:
        if not prose:
            return []
        match = find_job_block(prose, job.company, job.title, companies)
        if match.ambiguous:
            self._warn(
                f"Ambiguous match for company {job.company!r} in AI prose; "
                "using the form description instead"
            )
            return []
        return filter_bullets(match.bullets)

    def _form_experience(self, form: FormData, prose: str) -> List[ExperienceEntry]:
        companies = [j.company for j in form.experience]
        out: List[ExperienceEntry] = []
        for job in form.experience:
            chain = ProviderChain(f"achievements[{job.company or job.title}]")
            chain.add("ai", lambda job=job: self._ai_bullets(prose, job, companies))
            chain.add("description", lambda job=job: filter_bullets(split_description(job.description)))
            achievements = chain.value(default=[])
            entry = ExperienceEntry(
                title=normalize_title(job.title),
                company=normalize_org(job.company),
                location=normalize_place(job.location),
                period=format_period(job.start_date, job.end_date, job.current),
                achievements=tuple(achievements),
            )
            out.append(entry)
        return out

    def _form_education(self, form: FormData) -> List[EducationEntry]:
        out: List[EducationEntry] = []
        for edu in form.education:
            degree = normalize_title(edu.degree)
            if edu.field:
                degree = f"{degree} in {normalize_title(edu.field)}" if degree else normalize_title(edu.field)
            details = edu.highlights or (f"GPA: {edu.gpa}" if edu.gpa else "")
            out.append(
                EducationEntry(
                    degree=degree,
                    school=normalize_org(edu.school),
                    period=format_period(edu.start_date, edu.end_date, edu.current),
                    details=details,
                )
            )
        return out

    def build_from_form(self, form: Any, ai_prose: Optional[str] = None) -> ResumeStructure:
        """Build from form fields; AI prose only supplies bullets and the summary."""
        if not isinstance(form, FormData):
            form = FormData.from_dict(form)
        prose = strip_sidebar_sections(ai_prose) if ai_prose else ""

        summary_chain = ProviderChain("summary")
        summary_chain.add("ai", lambda: extract_prose_summary(ai_prose or ""))
        summary_chain.add("form", lambda: re.sub(r"\s+", " ", form.summary).strip())
        summary_chain.add(
            "synthesized",
            lambda: synthesize_summary(
                form.target_job_title,
                years_of_experience(form.experience, self.today),
                form.target_industry,
            ),
        )

        return ResumeStructure(
            name=normalize_title(form.full_name),
            contact=Contact(
                email=form.email.lower(),
                phone=form.phone,
                location=normalize_place(form.location),
                linkedin=form.linkedin,
                portfolio=form.portfolio,
            ),
            summary=summary_chain.value(default=""),
            experience=tuple(self._form_experience(form, prose)),
            education=tuple(self._form_education(form)),
            skills=self.normalize_skills(
                form.technical_skills, form.soft_skills, form.languages, form.certifications
            ),
        )

    # -------------------------------------------------------------------------
    # From text
    # -------------------------------------------------------------------------

    def build_from_text(self, text: str) -> ResumeStructure:
        """Classify free-form text and map each recognized section to its field."""
        sections = classify(text)
        name, contact = extract_contact(sections.get(HEADER) or [], sections.get("contact"))
        skills: Dict[str, List[str]] = extract_skills(sections.get("skills") or [])
        languages = skills["languages"] + extract_languages(sections.get("languages") or [])
        certifications = (
            skills["certifications"]
            + extract_certifications(sections.get("certifications") or [])
            + find_certifications([ln for lines in sections.values() for ln in lines])
        )
        experience = [self.normalize_experience(e) for e in extract_experience(sections.get("experience") or [])]
        education = [self.normalize_education(e) for e in extract_education(sections.get("education") or [])]
        unknown = [k for k in sections if k not in {HEADER, "summary", "experience", "education", "skills",
                                                    "languages", "certifications", "contact"}]
        if unknown:
            LOG.debug("Ignoring unrecognized sections: %s", ", ".join(unknown))
        return ResumeStructure(
            name=normalize_title(name),
            contact=Contact(
                email=contact.email.lower(),
                phone=contact.phone,
                location=normalize_place(contact.location),
                linkedin=contact.linkedin,
                portfolio=contact.portfolio,
            ),
            summary=extract_summary(sections.get("summary") or []),
            experience=tuple(experience),
            education=tuple(education),
            skills=self.normalize_skills(skills["technical"], skills["soft"], languages, certifications),
        )


def build_from_form(form: Any, ai_prose: Optional[str] = None, today: Optional[date] = None) -> ResumeStructure:
    return StructureBuilder(today=today).build_from_form(form, ai_prose)


def build_from_text(text: str) -> ResumeStructure:
    return StructureBuilder().build_from_text(text)
