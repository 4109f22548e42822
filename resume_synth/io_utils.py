from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def load_config(path: Optional[str | os.PathLike[str]]) -> Dict[str, Any]:
    """Load a YAML file into a dict; returns {} if missing/empty."""
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    data = yaml.safe_load(text)
    if data is None:
        return {}
    return data


def dump_config(path: str | os.PathLike[str], data: Any) -> None:
    """Write data to YAML with stable ordering for humans."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")


def read_text(path: str | os.PathLike[str]) -> str:
    return Path(path).read_text(encoding="utf-8", errors="ignore")


def read_yaml_or_json(path: str | os.PathLike[str]) -> Any:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(errno.ENOENT, "No such file", str(p))
    if p.suffix.lower() in {".yaml", ".yml"}:
        return load_config(p)
    return json.loads(p.read_text(encoding="utf-8"))


def write_yaml_or_json(data: Any, path: str | os.PathLike[str]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.suffix.lower() in {".yaml", ".yml"}:
        dump_config(p, data)
        return
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_bytes(content: bytes, path: str | os.PathLike[str]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(content)
    return p
