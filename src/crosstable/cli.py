"""Command-line interface for normalizing crosstable reports."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from crosstable.config_loader import ExportProfile
from crosstable.errors import CrosstableError
from crosstable.export import TableExportError, players_to_csv, rounds_to_csv, summary_to_csv
from crosstable.persistence import TournamentStore
from crosstable.pipeline import run_pipeline_from_path


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Normalize a chess tournament crosstable")
    parser.add_argument("report", type=Path, help="Path to the crosstable text report")
    parser.add_argument("--layout", default=None, help="Report layout key (default USCF)")
    parser.add_argument("--players-out", type=Path, default=Path("players.csv"), help="Players CSV path")
    parser.add_argument("--rounds-out", type=Path, default=Path("rounds.csv"), help="Rounds CSV path")
    parser.add_argument("--summary-out", type=Path, default=None, help="Optional summary CSV path")
    parser.add_argument(
        "--player-column",
        action="append",
        default=[],
        help="Restrict the players CSV to these columns (repeatable)",
    )
    parser.add_argument(
        "--round-column",
        action="append",
        default=[],
        help="Restrict the rounds CSV to these columns (repeatable)",
    )
    parser.add_argument(
        "--report",
        dest="report_path",
        type=Path,
        default=None,
        help="Optional path to write the diagnostics JSON",
    )
    parser.add_argument("--db", type=Path, default=None, help="Store the tables in this SQLite file")
    parser.add_argument("--name", default=None, help="Tournament name used with --db")
    parser.add_argument("--load-profile", type=Path, help="Load export profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save export profile JSON", default=None)
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    profile = ExportProfile.load(args.load_profile) if args.load_profile else ExportProfile()
    if args.layout:
        profile.layout = args.layout
    if args.player_column:
        profile.player_columns = list(args.player_column)
    if args.round_column:
        profile.round_columns = list(args.round_column)

    try:
        result = run_pipeline_from_path(args.report, layout=profile.layout)
    except CrosstableError as exc:
        raise SystemExit(f"Cannot parse {args.report}: {exc}") from exc
    except KeyError as exc:
        raise SystemExit(str(exc.args[0])) from exc

    try:
        players_csv = players_to_csv(result.players, columns=profile.player_columns)
        rounds_csv = rounds_to_csv(result.rounds, columns=profile.round_columns)
    except TableExportError as exc:
        raise SystemExit(str(exc)) from exc

    args.players_out.write_text(players_csv, encoding="utf-8")
    args.rounds_out.write_text(rounds_csv, encoding="utf-8")
    print(
        f"Wrote {len(result.players)} players to {args.players_out} "
        f"and {len(result.rounds)} rounds to {args.rounds_out}"
    )
    if args.summary_out:
        args.summary_out.write_text(summary_to_csv(result.players), encoding="utf-8")
        print(f"Wrote summary to {args.summary_out}")

    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved export profile to {args.save_profile}")

    if args.report_path:
        args.report_path.write_text(json.dumps(result.report.as_dict(), indent=2), encoding="utf-8")
        print(f"Wrote diagnostics to {args.report_path}")

    if args.db:
        store = TournamentStore(args.db)
        summary = store.save_tournament(result, name=args.name or args.report.stem)
        print(f"Stored tournament {summary.tournament_id} in {store.db_path}")

    warnings = result.report.warnings
    if warnings:
        preview = "; ".join(warning.message for warning in warnings[:5])
        more = len(warnings) - 5
        suffix = f"; +{more} more" if more > 0 else ""
        print(f"Warnings: {preview}{suffix}")


if __name__ == "__main__":
    main()
