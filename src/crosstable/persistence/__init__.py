"""Persistence layer for storing normalized tournament tables."""

from __future__ import annotations

import json
import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from crosstable.models import PlayerRecord, RoundResult
from crosstable.pipeline import CrosstableResult


@dataclass
class TournamentSummary:
    tournament_id: str
    name: str
    created_at: datetime
    rounds_per_player: int
    total_players: int


@dataclass
class TournamentRecord:
    tournament_id: str
    name: str
    created_at: datetime
    rounds_per_player: int
    report: dict
    players: List[PlayerRecord]
    rounds: List[RoundResult]


class TournamentStore:
    """Simple SQLite-backed store for parsed tournaments."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv("CROSSTABLE_DB_PATH")
        if env_db:
            if env_db.startswith("file:"):
                self.db_path: Path | str = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tournaments (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    rounds_per_player INTEGER NOT NULL,
                    report_json TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    tournament_id TEXT NOT NULL,
                    pair_number INTEGER NOT NULL,
                    state TEXT,
                    name TEXT NOT NULL,
                    uscf_id TEXT,
                    pre_rating INTEGER,
                    post_rating INTEGER,
                    total_points REAL,
                    rating_change INTEGER,
                    average_opponent_rating REAL,
                    PRIMARY KEY (tournament_id, pair_number)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS rounds (
                    tournament_id TEXT NOT NULL,
                    round_id INTEGER NOT NULL,
                    player_number INTEGER NOT NULL,
                    round_number INTEGER NOT NULL,
                    color TEXT NOT NULL,
                    result TEXT NOT NULL,
                    opponent_number INTEGER,
                    PRIMARY KEY (tournament_id, round_id)
                )
                """
            )
            conn.commit()

    def save_tournament(
        self,
        result: CrosstableResult,
        *,
        name: str,
        tournament_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> TournamentSummary:
        """Store both tables; saving an existing id replaces its rows."""

        tournament_id = tournament_id or uuid4().hex
        created_at = created_at or datetime.now(timezone.utc)
        with self._connect() as conn:
            for table in ("players", "rounds"):
                conn.execute(f"DELETE FROM {table} WHERE tournament_id = ?", (tournament_id,))
            conn.execute(
                """
                INSERT OR REPLACE INTO tournaments (
                    id, name, created_at, rounds_per_player, report_json
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    tournament_id,
                    name,
                    created_at.isoformat(),
                    result.report.rounds_per_player,
                    json.dumps(result.report.as_dict()),
                ),
            )
            conn.executemany(
                """
                INSERT INTO players (
                    tournament_id, pair_number, state, name, uscf_id, pre_rating,
                    post_rating, total_points, rating_change, average_opponent_rating
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        tournament_id,
                        player.pair_number,
                        player.state,
                        player.name,
                        player.uscf_id,
                        player.pre_rating,
                        player.post_rating,
                        player.total_points,
                        player.rating_change,
                        player.average_opponent_rating,
                    )
                    for player in result.players
                ],
            )
            conn.executemany(
                """
                INSERT INTO rounds (
                    tournament_id, round_id, player_number, round_number,
                    color, result, opponent_number
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        tournament_id,
                        row.round_id,
                        row.player_number,
                        row.round_number,
                        row.color.value,
                        row.result.value,
                        row.opponent_number,
                    )
                    for row in result.rounds
                ],
            )
            conn.commit()
        return TournamentSummary(
            tournament_id=tournament_id,
            name=name,
            created_at=created_at,
            rounds_per_player=result.report.rounds_per_player,
            total_players=len(result.players),
        )

    def get_tournament(self, tournament_id: str) -> Optional[TournamentRecord]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM tournaments WHERE id = ?", (tournament_id,)
            ).fetchone()
            if row is None:
                return None
            player_rows = conn.execute(
                "SELECT * FROM players WHERE tournament_id = ? ORDER BY pair_number",
                (tournament_id,),
            ).fetchall()
            round_rows = conn.execute(
                "SELECT * FROM rounds WHERE tournament_id = ? ORDER BY round_id",
                (tournament_id,),
            ).fetchall()
        return TournamentRecord(
            tournament_id=row["id"],
            name=row["name"],
            created_at=datetime.fromisoformat(row["created_at"]),
            rounds_per_player=row["rounds_per_player"],
            report=json.loads(row["report_json"]),
            players=[self._row_to_player(player) for player in player_rows],
            rounds=[self._row_to_round(entry) for entry in round_rows],
        )

    def list_tournaments(self, limit: int = 50) -> List[TournamentSummary]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT t.*, (
                    SELECT COUNT(*) FROM players p WHERE p.tournament_id = t.id
                ) AS total_players
                FROM tournaments t
                ORDER BY datetime(t.created_at) DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [
            TournamentSummary(
                tournament_id=row["id"],
                name=row["name"],
                created_at=datetime.fromisoformat(row["created_at"]),
                rounds_per_player=row["rounds_per_player"],
                total_players=row["total_players"],
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            pair_number=row["pair_number"],
            state=row["state"],
            name=row["name"],
            uscf_id=row["uscf_id"],
            pre_rating=row["pre_rating"],
            post_rating=row["post_rating"],
            total_points=row["total_points"],
            rating_change=row["rating_change"],
            average_opponent_rating=row["average_opponent_rating"],
        )

    @staticmethod
    def _row_to_round(row: sqlite3.Row) -> RoundResult:
        return RoundResult(
            round_id=row["round_id"],
            player_number=row["player_number"],
            round_number=row["round_number"],
            color=row["color"],
            result=row["result"],
            opponent_number=row["opponent_number"],
        )


__all__ = ["TournamentRecord", "TournamentStore", "TournamentSummary"]
