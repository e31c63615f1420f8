"""Unit of work over the JSON tables of one data directory.

Writers are serialised by a re-entrant lock shared by every unit of work
pointing at the same directory. On entry to the outermost block the
contents of every table are snapshotted; if the block raises they are
written back, so a failed operation leaves no partial writes behind.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from agrotic.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

_LOCKS: dict[Path, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(data_dir: Path) -> threading.RLock:
    with _LOCKS_GUARD:
        return _LOCKS.setdefault(data_dir.resolve(), threading.RLock())


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._lock = _lock_for(data_dir)
        self._depth = 0

    @contextmanager
    def transaction(self) -> Iterator[JsonUnitOfWork]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = self._snapshot() if outermost else {}
            self._depth += 1
            try:
                yield self
            except Exception:
                if outermost:
                    logger.warning("Transaction failed, restoring %d tables", len(snapshot))
                    self._restore(snapshot)
                raise
            finally:
                self._depth -= 1

    # --- File helpers ---------------------------------------------------------

    def _snapshot(self) -> dict[Path, str]:
        return {
            path: path.read_text(encoding="utf-8")
            for path in self._data_dir.glob("*.json")
        }

    def _restore(self, snapshot: dict[Path, str]) -> None:
        for path in self._data_dir.glob("*.json"):
            if path not in snapshot:
                path.write_text("[]\n", encoding="utf-8")
        for path, content in snapshot.items():
            path.write_text(content, encoding="utf-8")
