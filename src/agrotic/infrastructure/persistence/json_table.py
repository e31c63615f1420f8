"""One JSON file holding a list of rows, shared by every JSON repository."""

from __future__ import annotations

import json
from pathlib import Path


class JsonTable:

    def __init__(self, file_path: Path, seed: list[dict] | None = None) -> None:
        self._file_path = file_path
        self._seed = list(seed or [])
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist_raw(self, rows: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(rows, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def next_id(self, rows: list[dict]) -> str:
        if not rows:
            return "1"
        return str(max(int(r["id"]) for r in rows) + 1)

    def upsert(self, row: dict) -> None:
        rows = self.load_raw()
        for i, existing in enumerate(rows):
            if existing["id"] == row["id"]:
                rows[i] = row
                break
        else:
            rows.append(row)
        self.persist_raw(rows)

    def delete_where(self, key: str, value: str) -> None:
        rows = self.load_raw()
        kept = [r for r in rows if r.get(key) != value]
        if len(kept) != len(rows):
            self.persist_raw(kept)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.persist_raw(self._seed)
        elif self._seed and not self.load_raw():
            self.persist_raw(self._seed)
