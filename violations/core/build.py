"""Builds, the build repository interface, and the violations build action.

A Build is a numbered directory holding the artifacts recorded for it.
Actions attached to a build carry per-build data; the ViolationsBuildAction
owns the build's ViolationsReport and draws the trend graph.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Type, TypeVar

from .graph import DEFAULT_HEIGHT, DEFAULT_WIDTH, GraphImage, TrendPoint, render_trend_svg

if TYPE_CHECKING:
    from .report import ViolationsReport

logger = logging.getLogger(__name__)

A = TypeVar("A")


class Build:
    """A single build: its number, storage directory and attached actions."""

    def __init__(self, number: int, root_dir: Path, actions: Optional[List[object]] = None):
        self.number = number
        self.root_dir = Path(root_dir)
        self.actions: List[object] = list(actions or [])

    @property
    def id(self) -> str:
        return str(self.number)

    def get_root_dir(self) -> Path:
        return self.root_dir

    def add_action(self, action: object) -> None:
        self.actions.append(action)

    def get_action(self, action_type: Type[A]) -> Optional[A]:
        """First attached action of the given type, or None."""
        for action in self.actions:
            if isinstance(action, action_type):
                return action
        return None

    def __repr__(self) -> str:
        return f"Build(#{self.number})"


class BuildRepository(ABC):
    """Lookup of builds by number."""

    @abstractmethod
    def get_build(self, number: int) -> Optional[Build]:
        """Return the build with that number, or None."""
        ...

    @abstractmethod
    def get_builds(self) -> List[Build]:
        """All builds, newest first."""
        ...

    def delete_build(self, number: int) -> bool:
        raise NotImplementedError(f"{type(self).__name__} does not support deleting builds")

    def get_previous_build(self, build: Build) -> Optional[Build]:
        """The newest build older than ``build``."""
        for candidate in self.get_builds():
            if candidate.number < build.number:
                return candidate
        return None


class InMemoryBuildRepository(BuildRepository):
    """Repository over already constructed builds."""

    def __init__(self, builds: Optional[List[Build]] = None):
        self._builds: Dict[int, Build] = {}
        for build in builds or []:
            self.add(build)

    def add(self, build: Build) -> None:
        self._builds[build.number] = build

    def get_build(self, number: int) -> Optional[Build]:
        return self._builds.get(number)

    def get_builds(self) -> List[Build]:
        return sorted(self._builds.values(), key=lambda b: b.number, reverse=True)

    def delete_build(self, number: int) -> bool:
        return self._builds.pop(number, None) is not None


class ViolationsBuildAction:
    """Per-build action carrying the violations report."""

    def __init__(self, build: Build, report: "ViolationsReport", repository: Optional[BuildRepository] = None):
        self.build = build
        self.report = report
        self.repository = repository

    def get_report(self) -> "ViolationsReport":
        return self.report

    def get_previous(self) -> Optional["ViolationsBuildAction"]:
        """Action of the newest older build that has one."""
        if self.repository is None:
            return None
        build = self.repository.get_previous_build(self.build)
        while build is not None:
            action = build.get_action(ViolationsBuildAction)
            if action is not None:
                return action
            build = self.repository.get_previous_build(build)
        return None

    def iter_history(self) -> Iterator["ViolationsBuildAction"]:
        """This action followed by every older one."""
        action: Optional[ViolationsBuildAction] = self
        while action is not None:
            yield action
            action = action.get_previous()

    def trend(self, max_builds: Optional[int] = None) -> List[TrendPoint]:
        points: List[TrendPoint] = []
        for action in self.iter_history():
            if max_builds is not None and len(points) >= max_builds:
                break
            points.append((action.build.number, dict(action.report.get_violations())))
        return points

    def render_graph(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> GraphImage:
        """Trend graph of this build and its predecessors."""
        points = self.trend()
        logger.debug(f"Rendering violations graph for {self.build} over {len(points)} builds")
        svg = render_trend_svg(points, width=width, height=height)
        return GraphImage(content=svg.encode("utf-8"))
