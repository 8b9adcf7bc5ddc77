"""Renderable nodes for the file-violation browser.

Any path below a build's violations page names a file. The FileRouter maps
that path to one of two handlers: the file detail view when the build has
violations recorded for the file, or a "no violations" placeholder.
Either way the result is wrapped in a PathNode carrying the path it was
resolved from.
"""

import logging
from typing import Callable, Optional, Union

from .build import Build
from .model import FileModelProxy, FileView

logger = logging.getLogger(__name__)


class NoViolationsFile:
    """Placeholder for a file that has no recorded violations."""

    def __init__(self, name: str, build: Build):
        self.name = name
        self.build = build

    def to_dict(self, limit: Optional[int] = None) -> dict:
        return {
            "kind": "no_violations",
            "build": self.build.number,
            "name": self.name,
            "message": f"No violations found for {self.name}",
        }


Renderable = Union[FileView, NoViolationsFile]


class PathNode:
    """Path-continuation node: the remaining URL path and what it resolved to."""

    def __init__(self, prefix: str, name: str, target: Renderable):
        self.prefix = prefix
        self.name = name
        self.target = target

    @property
    def path(self) -> str:
        return f"{self.prefix}/{self.name}" if self.prefix else self.name

    def to_dict(self, limit: Optional[int] = None) -> dict:
        return {"path": self.path, **self.target.to_dict(limit=limit)}

    def __repr__(self) -> str:
        return f"PathNode({self.path!r}, {type(self.target).__name__})"


def strip_leading_separator(path: str) -> str:
    """Drop a single leading '/'."""
    return path[1:] if path.startswith("/") else path


class FileRouter:
    """Resolves a file path under a build's violations page.

    Args:
        lookup: file name -> FileModelProxy, None when the file is unknown
        build: the build being browsed
    """

    def __init__(self, lookup: Callable[[str], Optional[FileModelProxy]], build: Build):
        self._lookup = lookup
        self._build = build

    def resolve(self, path: str, context_path: str = "") -> PathNode:
        name = strip_leading_separator(path)
        proxy = self._lookup(name)
        if proxy is not None:
            return self._file_detail(name, proxy, context_path)
        return self._not_found(name)

    def _file_detail(self, name: str, proxy: FileModelProxy, context_path: str) -> PathNode:
        return PathNode("", name, proxy.build(self._build).context_path(context_path))

    def _not_found(self, name: str) -> PathNode:
        logger.debug(f"No violations recorded for '{name}' in {self._build}")
        return PathNode("", name, NoViolationsFile(name, self._build))
