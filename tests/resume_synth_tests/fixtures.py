"""resume_synth test fixtures.

Data builders, sample texts and document readers.

Structure:
    Data Builders (use defaults, override as needed):
        make_contact()     -> Contact for Jane Doe
        make_job()         -> ExperienceEntry with three achievements
        make_education()   -> EducationEntry
        make_skills()      -> Skills with all four groups
        make_structure()   -> complete ResumeStructure
        make_form()        -> form dict (camelCase keys, as the web form posts)

    Sample Data Constants:
        SAMPLE_AI_PROSE     - markdown prose with Acme and Globex blocks
        SAMPLE_RESUME_TEXT  - plain resume text with ALL-CAPS headings
        SAMPLE_COVER_LETTER - three paragraph cover letter

    Readers:
        pdf_text(), pdf_page_count(), pdf_char_colors(), docx_document()

Usage:
    from tests.resume_synth_tests.fixtures import make_structure

    structure = make_structure(summary="")
"""

from __future__ import annotations

import shutil
import tempfile
from io import BytesIO
from typing import Any, Dict, List, Optional, Tuple

from resume_synth.model import Contact, EducationEntry, ExperienceEntry, ResumeStructure, Skills

SAMPLE_NAME = "Jane Doe"
SAMPLE_EMAIL = "jane@example.com"

ACME_BULLETS = (
    "Led migration of payment services to Kubernetes, cutting costs 30%",
    "Built observability pipeline processing 2M events per day",
    "Mentored six engineers through promotion cycles",
)

# =============================================================================
# Data Builders
# =============================================================================


def make_contact(**overrides: Any) -> Contact:
    values = {
        "email": SAMPLE_EMAIL,
        "phone": "+1 555 123 4567",
        "location": "Austin, TX",
    }
    values.update(overrides)
    return Contact(**values)


def make_job(
    title: str = "Senior Engineer",
    company: str = "Acme",
    location: str = "Austin, TX",
    period: str = "January 2020 - Present",
    achievements: Optional[Tuple[str, ...]] = None,
) -> ExperienceEntry:
    """Example:
        job = make_job(company="Globex", achievements=("Shipped the billing rewrite",))
    """
    return ExperienceEntry(
        title=title,
        company=company,
        location=location,
        period=period,
        achievements=ACME_BULLETS if achievements is None else achievements,
    )


def make_education(**overrides: Any) -> EducationEntry:
    values = {
        "degree": "Bachelor of Science in Computer Science",
        "school": "University of Texas",
        "period": "2013 - 2017",
    }
    values.update(overrides)
    return EducationEntry(**values)


def make_skills(**overrides: Any) -> Skills:
    values = {
        "technical": ("Python", "SQL", "Kubernetes"),
        "soft": ("Leadership", "Communication"),
        "languages": ("English", "Spanish"),
        "certifications": ("AWS Certified Developer (2022)",),
    }
    values.update(overrides)
    return Skills(**values)


def make_structure(**overrides: Any) -> ResumeStructure:
    """Complete Jane Doe resume; override any top-level field."""
    values: Dict[str, Any] = {
        "name": SAMPLE_NAME,
        "contact": make_contact(),
        "summary": "Backend engineer focused on reliable payment systems.",
        "experience": (
            make_job(),
            make_job(
                title="Engineer",
                company="Globex",
                location="Dallas, TX",
                period="2017 - 2019",
                achievements=("Maintained billing platform serving 500 enterprise customers",),
            ),
        ),
        "education": (make_education(),),
        "skills": make_skills(),
    }
    values.update(overrides)
    return ResumeStructure(**values)


def make_long_structure(jobs: int = 30) -> ResumeStructure:
    """A resume long enough to span several pages."""
    bullets = tuple(
        f"Delivered project number {i} on schedule with measurable savings for the business"
        for i in range(5)
    )
    return make_structure(
        experience=tuple(
            make_job(title=f"Engineer {i}", company=f"Company {i}", achievements=bullets)
            for i in range(jobs)
        )
    )


def make_form(**overrides: Any) -> Dict[str, Any]:
    """Form payload as posted by the resume builder (camelCase keys)."""
    form: Dict[str, Any] = {
        "fullName": "jane doe",
        "email": "Jane@Example.com",
        "phone": "+1 555 123 4567",
        "location": "austin, tx",
        "targetJobTitle": "software engineer",
        "targetIndustry": "Technology",
        "summary": "",
        "experience": [
            {
                "title": "senior engineer",
                "company": "Acme",
                "location": "Austin, TX",
                "startDate": "2020-01",
                "current": True,
                "description": "Worked on payment services.",
            },
            {
                "title": "engineer",
                "company": "Globex",
                "location": "Dallas, TX",
                "startDate": "2018-01",
                "endDate": "2020-01",
                "description": "Maintained legacy billing services for enterprise clients.",
            },
        ],
        "education": [
            {
                "school": "university of texas",
                "degree": "bachelor of science",
                "field": "computer science",
                "startDate": "2013-09",
                "endDate": "2017-05",
                "gpa": "3.8",
            }
        ],
        "skills": {
            "technical": ["python", "sql", "javascript"],
            "soft": ["leadership"],
            "languages": ["english"],
            "certifications": ["AWS Certified Developer (2022)"],
        },
    }
    form.update(overrides)
    return form


# =============================================================================
# Sample Data Constants
# =============================================================================

SAMPLE_AI_PROSE = """## PROFESSIONAL SUMMARY
Seasoned engineer with a track record of shipping reliable platforms.

## PROFESSIONAL EXPERIENCE
**Senior Engineer | Acme | 2020 - Present**
- Led migration of payment services to Kubernetes, cutting costs 30%
- Built observability pipeline processing 2M events per day
- Mentored six engineers through promotion cycles

**Engineer | Globex | 2018 - 2020**
- Maintained billing platform serving 500 enterprise customers

## SKILLS
- Python, Kubernetes, Terraform and cloud infrastructure tools
"""

SAMPLE_RESUME_TEXT = """Jane Doe
jane.doe@example.com | (555) 123-4567 | Austin, TX

SUMMARY
Backend engineer focused on reliable payment systems.

EXPERIENCE
Senior Engineer
Acme Corp | Austin, TX | Jan 2020 - Present
- Led migration of payment services to Kubernetes, cutting costs 30%
- Built observability pipeline processing 2M events per day
- March 2021
Engineer | Globex | 2017 - 2019
- Maintained billing platform serving 500 enterprise customers

EDUCATION
Bachelor of Science in Computer Science | University of Texas | 2013 - 2017

SKILLS
Technical: Python, SQL, Docker
Professional: Leadership, Communication

LANGUAGES
English, Spanish

CERTIFICATIONS
AWS Certified Developer (2022)
"""

SAMPLE_COVER_LETTER = """Dear Hiring Manager,

I am writing to apply for the Senior Engineer role.
My background in payment systems is a close match.

Kind regards,
Jane Doe
"""


# =============================================================================
# Readers
# =============================================================================


def pdf_text(content: bytes) -> str:
    from pdfminer.high_level import extract_text

    return extract_text(BytesIO(content))


def pdf_page_count(content: bytes) -> int:
    from pdfminer.high_level import extract_pages

    return sum(1 for _ in extract_pages(BytesIO(content)))


def pdf_char_colors(content: bytes) -> List[Tuple[str, Any]]:
    """(character, non-stroking color) for every glyph in the document."""
    from pdfminer.high_level import extract_pages
    from pdfminer.layout import LTChar, LTContainer

    out: List[Tuple[str, Any]] = []

    def walk(obj) -> None:
        if isinstance(obj, LTChar):
            out.append((obj.get_text(), obj.graphicstate.ncolor))
        elif isinstance(obj, LTContainer):
            for child in obj:
                walk(child)

    for page in extract_pages(BytesIO(content)):
        walk(page)
    return out


def docx_document(content: bytes):
    from docx import Document

    return Document(BytesIO(content))


def docx_xml(content: bytes) -> str:
    import zipfile

    with zipfile.ZipFile(BytesIO(content)) as zf:
        return zf.read("word/document.xml").decode("utf-8")


class TempDirMixin:
    """Mixin providing a temporary directory that's cleaned up after each test."""

    tmpdir: str

    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        super().tearDown()
