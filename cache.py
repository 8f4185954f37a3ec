# cache.py
import logging
import threading
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class ViewCache(Protocol):
  def revalidate_path(self, path: str) -> None: ...


class PathCache:
  """In-process cache of rendered views keyed by their logical path.

  revalidate_path() drops the cached payload so the next read of that view
  recomputes it, and bumps a per-path generation counter.
  """

  def __init__(self) -> None:
    self._lock = threading.Lock()
    self._entries: Dict[str, Any] = {}
    self._generations: Dict[str, int] = {}

  def get(self, path: str) -> Optional[Any]:
    with self._lock:
      return self._entries.get(path)

  def put(self, path: str, value: Any) -> None:
    with self._lock:
      self._entries[path] = value

  def generation(self, path: str) -> int:
    with self._lock:
      return self._generations.get(path, 0)

  def revalidate_path(self, path: str) -> None:
    with self._lock:
      self._entries.pop(path, None)
      self._generations[path] = self._generations.get(path, 0) + 1
      gen = self._generations[path]
    logger.debug("revalidated %s (generation %d)", path, gen)


view_cache = PathCache()

def get_view_cache() -> PathCache:
  return view_cache
