"""ElementTree parsers for the violations artifacts.

    parse_build_model(xml_file) -> ModelResult     (violations/violations.xml)
    parse_file_model(xml_file)  -> FileModel       (violations/file/<name>.xml)

``parse_build_model`` never raises: any failure is returned as
``ModelResult.error`` so callers can degrade to "no detailed data".
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .constants import FILE_DIR, VIOLATIONS
from .model import BuildModel, FileCount, FileModel, FileModelProxy, Severity, Violation

logger = logging.getLogger(__name__)


class ModelParseError(Exception):
    """An artifact could not be read or does not have the expected shape."""

    def __init__(self, path: Union[str, Path], message: str):
        super().__init__(f"{path}: {message}")
        self.path = Path(path)
        self.message = message


@dataclass
class ModelResult:
    """Either a parsed BuildModel or the error that prevented parsing."""

    model: Optional[BuildModel] = None
    error: Optional[ModelParseError] = None

    @property
    def ok(self) -> bool:
        return self.model is not None


def _int_attr(element: ET.Element, name: str, path: Path, default: Optional[int] = None) -> int:
    raw = element.get(name)
    if raw is None:
        if default is None:
            raise ModelParseError(path, f"<{element.tag}> is missing '{name}'")
        return default
    try:
        return int(raw)
    except ValueError:
        raise ModelParseError(path, f"<{element.tag}> has non-integer {name}={raw!r}")


def _load_root(xml_file: Path, expected_tag: str) -> ET.Element:
    try:
        root = ET.parse(xml_file).getroot()
    except OSError as e:
        raise ModelParseError(xml_file, f"cannot read file ({e.strerror or e})") from e
    except ET.ParseError as e:
        raise ModelParseError(xml_file, f"malformed XML ({e})") from e
    if root.tag != expected_tag:
        raise ModelParseError(xml_file, f"expected <{expected_tag}> root, found <{root.tag}>")
    return root


def file_xml_path(build_root: Path, name: str) -> Path:
    """Location of the per-file artifact for a file name."""
    return build_root / FILE_DIR / f"{name}.xml"


def _build_model(xml_file: Path) -> BuildModel:
    root = _load_root(xml_file, VIOLATIONS)
    model = BuildModel(xml_file=xml_file)
    build_root = xml_file.parent.parent

    for type_el in root.findall("type"):
        name = type_el.get("name")
        if not name:
            raise ModelParseError(xml_file, "<type> is missing 'name'")
        model.type_counts[name] = _int_attr(type_el, "count", xml_file)

    for file_el in root.findall("file"):
        name = file_el.get("name")
        if not name:
            raise ModelParseError(xml_file, "<file> is missing 'name'")
        file_count = FileCount(name=name)
        for type_el in file_el.findall("type"):
            type_name = type_el.get("name")
            if not type_name:
                raise ModelParseError(xml_file, f"<type> under file '{name}' is missing 'name'")
            file_count.counts[type_name] = _int_attr(type_el, "count", xml_file)
        model.add_file_count(file_count, FileModelProxy(name, file_xml_path(build_root, name)))

    model.finish()
    return model


def parse_build_model(xml_file: Union[str, Path]) -> ModelResult:
    """Parse violations.xml into a BuildModel.

    Args:
        xml_file: Path to <build-root>/violations/violations.xml

    Returns:
        ModelResult holding the model, or the ModelParseError on failure
    """
    xml_file = Path(xml_file)
    try:
        model = _build_model(xml_file)
    except ModelParseError as e:
        return ModelResult(error=e)

    logger.debug(
        "Parsed %s: %d types, %d files",
        xml_file, len(model.type_counts), len(model.file_model_map),
    )
    return ModelResult(model=model)


def parse_file_model(xml_file: Union[str, Path]) -> FileModel:
    """Parse a per-file artifact.

    Raises:
        ModelParseError: On unreadable or malformed artifacts.
    """
    xml_file = Path(xml_file)
    root = _load_root(xml_file, "file")

    name = root.get("name")
    if not name:
        raise ModelParseError(xml_file, "<file> is missing 'name'")

    last_modified = root.get("last-modified")
    file_model = FileModel(
        display_name=name,
        source_file=root.get("file"),
        last_modified=_int_attr(root, "last-modified", xml_file) if last_modified else None,
    )

    for v_el in root.findall("violation"):
        level = v_el.get("severity-level")
        if level is not None:
            severity = Severity.from_level(_int_attr(v_el, "severity-level", xml_file))
        else:
            severity = Severity.from_name(v_el.get("severity"))
        file_model.add_violation(Violation(
            line=_int_attr(v_el, "line", xml_file, default=0),
            type=v_el.get("type", ""),
            source=v_el.get("source", ""),
            message=v_el.get("message", ""),
            severity=severity,
            popup_message=v_el.get("popup-message"),
        ))

    file_model.sort()
    return file_model
