"""Build repository backed by a directory of numbered builds.

    <builds-root>/
      41/violations/violations.xml
      42/violations/violations.xml
      42/violations/file/src/Foo.java.xml

Each build directory with a readable violations.xml gets a
ViolationsBuildAction whose report is seeded with the per-category counts
from that file.
"""

import logging
import shutil
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from .build import Build, BuildRepository, ViolationsBuildAction
from .cache import ModelCache
from .config import ViolationsConfig
from .constants import VIOLATIONS_XML
from .parser import parse_build_model
from .report import ViolationsReport

logger = logging.getLogger(__name__)


class FileSystemBuildRepository(BuildRepository):
    """Builds read from ``builds_root/<number>/``.

    Builds are loaded on first lookup and then kept. Deleting a build
    removes its directory and drops its cached model.
    """

    def __init__(
        self,
        builds_root: Union[str, Path],
        config: ViolationsConfig,
        cache: Optional[ModelCache] = None,
    ):
        self.builds_root = Path(builds_root)
        self.config = config
        self.cache = cache if cache is not None else ModelCache()
        self._builds: Dict[int, Build] = {}
        self._lock = threading.Lock()

    def _build_numbers(self) -> List[int]:
        if not self.builds_root.is_dir():
            return []
        return sorted(
            (int(p.name) for p in self.builds_root.iterdir() if p.is_dir() and p.name.isdigit()),
            reverse=True,
        )

    def _load_build(self, number: int) -> Build:
        build = Build(number, self.builds_root / str(number))
        xml_file = build.get_root_dir() / VIOLATIONS_XML
        if not xml_file.exists():
            logger.debug(f"{build} has no violations report")
            return build

        result = parse_build_model(xml_file)
        if not result.ok:
            logger.warning(f"Unable to read violation counts for {build}: {result.error.message}")
            return build

        report = ViolationsReport(
            build,
            self.config,
            violations=result.model.type_counts,
            repository=self,
            cache=self.cache,
        )
        build.add_action(ViolationsBuildAction(build, report, self))
        return build

    def get_build(self, number: int) -> Optional[Build]:
        with self._lock:
            build = self._builds.get(number)
        if build is not None:
            return build
        if not (self.builds_root / str(number)).is_dir():
            return None

        build = self._load_build(number)
        with self._lock:
            # Another request may have loaded it meanwhile; keep the first.
            return self._builds.setdefault(number, build)

    def get_builds(self) -> List[Build]:
        builds = []
        for number in self._build_numbers():
            build = self.get_build(number)
            if build is not None:
                builds.append(build)
        return builds

    def get_previous_build(self, build: Build) -> Optional[Build]:
        for number in self._build_numbers():
            if number < build.number:
                return self.get_build(number)
        return None

    def delete_build(self, number: int) -> bool:
        build_dir = self.builds_root / str(number)
        if not build_dir.is_dir():
            return False
        shutil.rmtree(build_dir)
        with self._lock:
            self._builds.pop(number, None)
        self.cache.discard(str(number))
        logger.info(f"Deleted build #{number}")
        return True
