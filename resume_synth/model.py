"""Resume data model.

Everything the layout strategies consume is an immutable dataclass. Builders
assemble plain lists and hand them over; ``__post_init__`` freezes them into
tuples so a built structure cannot be mutated by a renderer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


def unique_terms(items: Iterable[Any]) -> Tuple[str, ...]:
    """Strip, drop empties and de-duplicate case-insensitively, keeping first spelling."""
    seen = set()
    out: List[str] = []
    for item in items or ():
        text = str(item or "").strip()
        if not text:
            continue
        key = text.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(text)
    return tuple(out)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, str):
        return [p for p in (s.strip() for s in value.split(",")) if p]
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


@dataclass(frozen=True)
class Contact:
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    portfolio: str = ""

    def fields(self) -> List[str]:
        """Non-empty contact values in display order."""
        return [v for v in (self.email, self.phone, self.location, self.linkedin, self.portfolio) if v]

    def is_empty(self) -> bool:
        return not self.fields()


@dataclass(frozen=True)
class ExperienceEntry:
    title: str = ""
    company: str = ""
    location: str = ""
    period: str = ""
    achievements: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "achievements", tuple(a for a in self.achievements if a))

    def is_empty(self) -> bool:
        return not (self.title or self.company or self.period or self.achievements)


@dataclass(frozen=True)
class EducationEntry:
    degree: str = ""
    school: str = ""
    period: str = ""
    details: str = ""

    def is_empty(self) -> bool:
        return not (self.degree or self.school or self.period or self.details)


@dataclass(frozen=True)
class Skills:
    technical: Tuple[str, ...] = ()
    soft: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    certifications: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("technical", "soft", "languages", "certifications"):
            object.__setattr__(self, name, unique_terms(getattr(self, name)))

    def is_empty(self) -> bool:
        return not (self.technical or self.soft or self.languages or self.certifications)


@dataclass(frozen=True)
class ResumeStructure:
    name: str = ""
    contact: Contact = field(default_factory=Contact)
    summary: str = ""
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    skills: Skills = field(default_factory=Skills)

    def __post_init__(self) -> None:
        object.__setattr__(self, "experience", tuple(e for e in self.experience if not e.is_empty()))
        object.__setattr__(self, "education", tuple(e for e in self.education if not e.is_empty()))

    def is_empty(self) -> bool:
        return not (
            self.name
            or not self.contact.is_empty()
            or self.summary
            or self.experience
            or self.education
            or not self.skills.is_empty()
        )

    # -------------------------------------------------------------------------
    # Plain-data conversion
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "contact": {
                "email": self.contact.email,
                "phone": self.contact.phone,
                "location": self.contact.location,
                "linkedin": self.contact.linkedin,
                "portfolio": self.contact.portfolio,
            },
            "summary": self.summary,
            "experience": [
                {
                    "title": e.title,
                    "company": e.company,
                    "location": e.location,
                    "period": e.period,
                    "achievements": list(e.achievements),
                }
                for e in self.experience
            ],
            "education": [
                {"degree": e.degree, "school": e.school, "period": e.period, "details": e.details}
                for e in self.education
            ],
            "skills": {
                "technical": list(self.skills.technical),
                "soft": list(self.skills.soft),
                "languages": list(self.skills.languages),
                "certifications": list(self.skills.certifications),
            },
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ResumeStructure":
        """Build from plain data; tolerates missing keys and ``None`` values."""
        data = data or {}
        contact = data.get("contact") or {}
        skills = data.get("skills") or {}
        if not isinstance(skills, Mapping):
            skills = {"technical": skills}
        experience = []
        for item in data.get("experience") or []:
            if not isinstance(item, Mapping):
                continue
            experience.append(
                ExperienceEntry(
                    title=_text(item.get("title")),
                    company=_text(item.get("company")),
                    location=_text(item.get("location")),
                    period=_text(item.get("period")),
                    achievements=tuple(_text(a) for a in _as_list(item.get("achievements") or item.get("bullets"))),
                )
            )
        education = []
        for item in data.get("education") or []:
            if not isinstance(item, Mapping):
                continue
            education.append(
                EducationEntry(
                    degree=_text(item.get("degree")),
                    school=_text(item.get("school") or item.get("institution")),
                    period=_text(item.get("period") or item.get("year")),
                    details=_text(item.get("details")),
                )
            )
        return cls(
            name=_text(data.get("name")),
            contact=Contact(
                email=_text(contact.get("email") or data.get("email")),
                phone=_text(contact.get("phone") or data.get("phone")),
                location=_text(contact.get("location") or data.get("location")),
                linkedin=_text(contact.get("linkedin")),
                portfolio=_text(contact.get("portfolio") or contact.get("website")),
            ),
            summary=_text(data.get("summary")),
            experience=tuple(experience),
            education=tuple(education),
            skills=Skills(
                technical=tuple(_as_list(skills.get("technical"))),
                soft=tuple(_as_list(skills.get("soft"))),
                languages=tuple(_as_list(skills.get("languages"))),
                certifications=tuple(_as_list(skills.get("certifications"))),
            ),
        )
