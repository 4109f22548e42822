"""resume-synth CLI.

Commands:
  sections      - Show the raw section map of a free-form resume text
  parse         - Parse free-form text into a resume structure (YAML/JSON)
  build         - Build a structure from form data plus optional AI prose
  render        - Render a structure (or text/form) to PDF and/or DOCX
  cover-letter  - Render cover letter prose to PDF and/or DOCX
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import yaml

from .. import __version__
from ..builder import StructureBuilder
from ..classifier import classify
from ..engine import FORMATS, synthesize, synthesize_cover_letter
from ..errors import ConfigError
from ..io_utils import read_text, read_yaml_or_json, write_bytes, write_yaml_or_json
from ..model import ResumeStructure
from ..render_config import ColorPreset, Template, load_settings
from .app import CLIApp

app = CLIApp(
    "resume-synth",
    "Build resume structures from text or forms and render them to PDF and DOCX.",
    version=__version__,
)

TEMPLATE_CHOICES = [t.value for t in Template]
COLOR_CHOICES = [c.value for c in ColorPreset]
FORMAT_CHOICES = list(FORMATS) + ["both"]


def _today(args: argparse.Namespace) -> Optional[date]:
    value = getattr(args, "today", None)
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ConfigError(f"Invalid --today date: {value!r}", hint="Use YYYY-MM-DD") from None


def _emit(data, out: Optional[str]) -> None:
    """Write to ``out`` (YAML or JSON by suffix) or YAML on stdout."""
    if out:
        write_yaml_or_json(data, out)
        print(f"Wrote {out}")
    else:
        sys.stdout.write(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))


def _formats(value: str) -> List[str]:
    return list(FORMATS) if value == "both" else [value]


def _load_structure(args: argparse.Namespace) -> ResumeStructure:
    builder = StructureBuilder(today=_today(args))
    if getattr(args, "structure", None):
        return ResumeStructure.from_dict(read_yaml_or_json(args.structure))
    if getattr(args, "form", None):
        prose = read_text(args.ai_prose) if getattr(args, "ai_prose", None) else None
        structure = builder.build_from_form(read_yaml_or_json(args.form), prose)
    elif getattr(args, "text", None):
        structure = builder.build_from_text(read_text(args.text))
    else:
        raise ConfigError("No input given", hint="Pass --structure, --form or --text")
    for warning in builder.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    return structure


# --- sections command ---
@app.command("sections", help="Show the raw section map of a resume text")
@app.argument("--text", required=True, help="Resume text file (markdown or plain)")
@app.argument("--out", help="Output file (.yaml/.json); default prints YAML")
def cmd_sections(args: argparse.Namespace) -> int:
    _emit(classify(read_text(args.text)), args.out)
    return 0


# --- parse command ---
@app.command("parse", help="Parse free-form resume text into a structure")
@app.argument("--text", required=True, help="Resume text file (markdown or plain)")
@app.argument("--out", help="Output file (.yaml/.json); default prints YAML")
def cmd_parse(args: argparse.Namespace) -> int:
    _emit(_load_structure(args).to_dict(), args.out)
    return 0


# --- build command ---
@app.command("build", help="Build a structure from form data and optional AI prose")
@app.argument("--form", required=True, help="Form data file (YAML/JSON)")
@app.argument("--ai-prose", help="AI generated resume text used for bullets and summary")
@app.argument("--today", help="Reference date for years of experience (YYYY-MM-DD)")
@app.argument("--out", help="Output file (.yaml/.json); default prints YAML")
def cmd_build(args: argparse.Namespace) -> int:
    _emit(_load_structure(args).to_dict(), args.out)
    return 0


# --- render command ---
@app.command("render", help="Render a resume to PDF and/or DOCX")
@app.argument("--structure", help="Resume structure file (YAML/JSON)")
@app.argument("--form", help="Form data file (YAML/JSON)")
@app.argument("--ai-prose", help="AI prose to use with --form")
@app.argument("--text", help="Free-form resume text file")
@app.argument("--template", "-t", choices=TEMPLATE_CHOICES, default="modern", help="Template (default: modern)")
@app.argument("--color", "-c", choices=COLOR_CHOICES, default="blue", help="Color preset (default: blue)")
@app.argument("--format", "-f", dest="fmt", choices=FORMAT_CHOICES, default="pdf", help="Output format")
@app.argument("--settings", help="Engine settings YAML")
@app.argument("--today", help="Date used for file names (YYYY-MM-DD)")
@app.argument("--out-dir", default="out", help="Output directory (default: out)")
def cmd_render(args: argparse.Namespace) -> int:
    structure = _load_structure(args)
    settings = load_settings(args.settings)
    for fmt in _formats(args.fmt):
        doc = synthesize(
            structure,
            template=args.template,
            color=args.color,
            fmt=fmt,
            settings=settings,
            today=_today(args),
        )
        path = write_bytes(doc.content, Path(args.out_dir) / doc.filename)
        print(f"Wrote {path}")
    return 0


# --- cover-letter command ---
@app.command("cover-letter", help="Render cover letter prose to PDF and/or DOCX")
@app.argument("--text", required=True, help="Cover letter text; paragraphs separated by blank lines")
@app.argument("--author", default="", help="Author name for document metadata")
@app.argument("--template", "-t", choices=TEMPLATE_CHOICES, default="modern", help="Template (default: modern)")
@app.argument("--color", "-c", choices=COLOR_CHOICES, default="blue", help="Color preset (default: blue)")
@app.argument("--format", "-f", dest="fmt", choices=FORMAT_CHOICES, default="pdf", help="Output format")
@app.argument("--settings", help="Engine settings YAML")
@app.argument("--today", help="Date used for file names (YYYY-MM-DD)")
@app.argument("--out-dir", default="out", help="Output directory (default: out)")
def cmd_cover_letter(args: argparse.Namespace) -> int:
    text = read_text(args.text)
    settings = load_settings(args.settings)
    for fmt in _formats(args.fmt):
        doc = synthesize_cover_letter(
            text,
            template=args.template,
            color=args.color,
            fmt=fmt,
            author=args.author,
            settings=settings,
            today=_today(args),
        )
        path = write_bytes(doc.content, Path(args.out_dir) / doc.filename)
        print(f"Wrote {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the resume-synth CLI."""
    return app.run(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
