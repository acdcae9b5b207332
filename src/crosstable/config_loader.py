"""Persist and load CLI export profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class ExportProfile:
    layout: str = "USCF"
    player_columns: List[str] = field(default_factory=list)
    round_columns: List[str] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "ExportProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            layout=data.get("layout", "USCF"),
            player_columns=list(data.get("player_columns", [])),
            round_columns=list(data.get("round_columns", [])),
        )

    def save(self, path: Path) -> None:
        payload = {
            "layout": self.layout,
            "player_columns": self.player_columns,
            "round_columns": self.round_columns,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
