"""Size-bounded cache of parsed build models.

Parsed models can be large, so only the most recently used builds are kept.
An evicted or invalidated model is simply re-parsed by the next request
that needs it.

Usage:
    cache = ModelCache(max_entries=32)
    model = cache.get(build_id)      # None on miss
    cache.put(build_id, model)
    cache.invalidate(build_id)       # drop the model, keep its generation
    cache.discard(build_id)          # e.g. after the build is deleted
    cache.clear()
"""

import logging
import threading
from collections import OrderedDict
from typing import Dict, Optional

from .constants import DEFAULT_CACHE_SIZE
from .model import BuildModel

logger = logging.getLogger(__name__)


class ModelCache:
    """LRU cache of BuildModel keyed by build id.

    Each build id has a generation counter that is bumped every time a
    freshly parsed model is stored, so callers can tell a re-parse apart
    from a cache hit.

    Two requests missing at the same time will both parse and the later
    ``put`` wins; parsing is idempotent so this is harmless.
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_SIZE):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, BuildModel]" = OrderedDict()
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, build_id: str) -> Optional[BuildModel]:
        with self._lock:
            model = self._entries.get(build_id)
            if model is None:
                logger.debug(f"Model cache miss for build {build_id}")
                return None
            self._entries.move_to_end(build_id)
            logger.debug(f"Model cache hit for build {build_id}")
            return model

    def put(self, build_id: str, model: BuildModel) -> int:
        """Store a freshly parsed model. Returns its generation."""
        with self._lock:
            self._entries[build_id] = model
            self._entries.move_to_end(build_id)
            generation = self._generations.get(build_id, 0) + 1
            self._generations[build_id] = generation

            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted model for build {evicted}")

            logger.info(f"Cached model for build {build_id} (generation {generation})")
            return generation

    def generation(self, build_id: str) -> int:
        """Number of times a model was stored for the build (0 if never)."""
        with self._lock:
            return self._generations.get(build_id, 0)

    def invalidate(self, build_id: Optional[str] = None) -> None:
        """Drop one build's model, or every model when build_id is None."""
        with self._lock:
            if build_id is not None:
                if self._entries.pop(build_id, None) is not None:
                    logger.debug(f"Invalidated model for build {build_id}")
            else:
                self._entries.clear()
                logger.debug("Invalidated all cached models")

    def discard(self, build_id: str) -> None:
        """Forget a build entirely: its model and its generation history."""
        with self._lock:
            self._entries.pop(build_id, None)
            self._generations.pop(build_id, None)
            logger.debug(f"Discarded build {build_id} from model cache")

    def clear(self) -> None:
        self.invalidate()

    def __contains__(self, build_id: str) -> bool:
        with self._lock:
            return build_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict:
        with self._lock:
            return {
                "entries": len(self._entries),
                "max_entries": self._max_entries,
                "builds": list(self._entries.keys()),
            }

    @property
    def max_entries(self) -> int:
        return self._max_entries
