"""Shared fixtures: build directories with violations artifacts on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional
from xml.sax.saxutils import quoteattr

import pytest


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def write_violations_xml(
    build_dir: Path,
    counts: Dict[str, int],
    files: Optional[Dict[str, Dict[str, int]]] = None,
) -> Path:
    """Write <build_dir>/violations/violations.xml."""
    lines = ["<violations>"]
    for name, count in counts.items():
        lines.append(f"  <type name={quoteattr(name)} count=\"{count}\"/>")
    for file_name, file_counts in (files or {}).items():
        lines.append(f"  <file name={quoteattr(file_name)}>")
        for name, count in file_counts.items():
            lines.append(f"    <type name={quoteattr(name)} count=\"{count}\"/>")
        lines.append("  </file>")
    lines.append("</violations>")
    return _write(build_dir / "violations" / "violations.xml", "\n".join(lines))


def write_file_xml(build_dir: Path, name: str, violations: List[dict]) -> Path:
    """Write <build_dir>/violations/file/<name>.xml."""
    lines = [f"<file name={quoteattr(name)} file={quoteattr('/src/' + name)} last-modified=\"1700000000000\">"]
    for v in violations:
        attrs = " ".join(f"{k}={quoteattr(str(val))}" for k, val in v.items())
        lines.append(f"  <violation {attrs}/>")
    lines.append("</file>")
    return _write(build_dir / "violations" / "file" / f"{name}.xml", "\n".join(lines))


@pytest.fixture
def builds_root(tmp_path: Path) -> Path:
    root = tmp_path / "builds"
    root.mkdir()
    return root


@pytest.fixture
def make_build_dir(builds_root: Path) -> Callable[..., Path]:
    """Factory: create builds_root/<number> with a violations.xml."""

    def _make(
        number: int,
        counts: Dict[str, int],
        files: Optional[Dict[str, Dict[str, int]]] = None,
    ) -> Path:
        build_dir = builds_root / str(number)
        build_dir.mkdir(parents=True, exist_ok=True)
        write_violations_xml(build_dir, counts, files)
        return build_dir

    return _make
