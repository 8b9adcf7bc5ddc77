"""Violations report for a single build.

The report holds the per-category violation counts recorded for the build
and computes health from them. The detailed model (per-file violations)
is parsed from the build's violations.xml only when a page needs it, and
kept in a ModelCache so it can be dropped under memory pressure and
re-parsed later.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .build import Build, BuildRepository, ViolationsBuildAction
from .cache import ModelCache
from .config import ViolationsConfig
from .constants import VIOLATIONS_XML
from .graph import DEFAULT_HEIGHT, DEFAULT_WIDTH, GraphImage
from .health import HealthReport, worst_health
from .model import BuildModel, FileCount, FileModelProxy
from .parser import ModelResult, parse_build_model
from .render import FileRouter, PathNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeReport:
    """Display row for one category: name, health icon and count."""

    type: str
    icon: Optional[str]
    number: int


class ViolationsReport:
    """Violations report for one build.

    Attributes:
        build: The build the report belongs to
        config: Per-category thresholds
        repository: Used to find other builds when graphing
        cache: Where the parsed detailed model is kept
    """

    def __init__(
        self,
        build: Build,
        config: ViolationsConfig,
        violations: Optional[Mapping[str, int]] = None,
        repository: Optional[BuildRepository] = None,
        cache: Optional[ModelCache] = None,
    ):
        self.build = build
        self.config = config
        self.repository = repository
        self.cache = cache if cache is not None else ModelCache(max_entries=1)
        self._violations: Dict[str, int] = dict(sorted((violations or {}).items()))

    # ------------------------------------------------------------------
    # Counts and health
    # ------------------------------------------------------------------

    def get_violations(self) -> Mapping[str, int]:
        """Category -> count, sorted by category. Read-only."""
        return MappingProxyType(self._violations)

    def get_health_report_for(self, type_name: str) -> Optional[HealthReport]:
        """Health for one category.

        Returns None when the build recorded no count for the category or
        the category is not configured.
        """
        count = self._violations.get(type_name)
        if count is None or self.config is None:
            return None
        type_config = self.config.get(type_name)
        if type_config is None:
            return None

        h = type_config.health_for(count)
        if h < 0:
            return HealthReport(0, f"No xml report files found for {type_name}")
        return HealthReport(h, f"Number of {type_name} violations is {count}")

    def get_build_healths(self) -> List[HealthReport]:
        """One health report per configured category that has a count."""
        ret = []
        if self.config is None:
            return ret
        for type_name in self.config.type_configs:
            health = self.get_health_report_for(type_name)
            if health is not None:
                ret.append(health)
        return ret

    def get_build_health(self) -> Optional[HealthReport]:
        """Worst category health, or None if no category reported."""
        return worst_health(self.get_build_healths())

    def is_unstable(self) -> bool:
        """True if any category is over its unstable threshold."""
        if self.config is None:
            return False
        for type_name, count in self._violations.items():
            type_config = self.config.get(type_name)
            if type_config is not None and type_config.is_unstable(count):
                return True
        return False

    def get_type_reports(self) -> Dict[str, TypeReport]:
        """Category -> TypeReport for every category with a count, by name."""
        ret = {}
        for type_name, count in self._violations.items():
            health = self.get_health_report_for(type_name)
            ret[type_name] = TypeReport(
                type=type_name,
                icon=health.icon if health is not None else None,
                number=count,
            )
        return ret

    # ------------------------------------------------------------------
    # Detailed model
    # ------------------------------------------------------------------

    def _load_model(self) -> ModelResult:
        xml_file = self.build.get_root_dir() / VIOLATIONS_XML
        return parse_build_model(xml_file)

    def get_model(self) -> Optional[BuildModel]:
        """The detailed model, parsed from violations.xml on a cache miss.

        Returns None if the artifact is missing or cannot be parsed.
        """
        model = self.cache.get(self.build.id)
        if model is not None:
            return model

        result = self._load_model()
        if not result.ok:
            logger.warning(f"Unable to parse {result.error.path}: {result.error.message}")
            return None

        self.cache.put(self.build.id, result.model)
        return result.model

    def get_file_model_proxy(self, name: str) -> Optional[FileModelProxy]:
        model = self.get_model()
        if model is None:
            return None
        return model.get_file_model_map().get(name)

    def get_type_files(self, type_name: str) -> List[FileCount]:
        """Files with violations of one category, worst first. Empty without a model."""
        model = self.get_model()
        if model is None:
            return []
        return list(model.type_files.get(type_name, []))

    def get_dynamic(self, path: str, context_path: str = "") -> PathNode:
        """Resolve the rest of a URL path below this report to a file page."""
        return FileRouter(self.get_file_model_proxy, self.build).resolve(path, context_path)

    # ------------------------------------------------------------------
    # Graph
    # ------------------------------------------------------------------

    def do_graph(
        self,
        build_number: Optional[int] = None,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> Optional[GraphImage]:
        """Render the trend graph for ``build_number`` (default: this build).

        An unknown build number falls back to this build. Returns None when
        the resolved build has no violations action.

        The report serving the request is not necessarily the one for the
        build in the request path, hence the explicit build number.
        """
        target = self.build
        if build_number and self.repository is not None:
            target = self.repository.get_build(build_number) or self.build

        action = target.get_action(ViolationsBuildAction)
        if action is None:
            return None
        return action.render_graph(width=width, height=height)
