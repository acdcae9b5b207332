"""Lightweight REST client for the crosstable API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the crosstable REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("report", type=Path, nargs="?", help="Crosstable text report")
    parser.add_argument("--name", default=None, help="Tournament name when storing")
    parser.add_argument("--layout", default="USCF", help="Report layout key")
    parser.add_argument("--parse-only", action="store_true", help="Parse without storing the tournament")
    parser.add_argument("--list", action="store_true", help="List stored tournaments and exit")
    parser.add_argument("--get", metavar="TOURNAMENT_ID", help="Fetch a stored tournament and exit")
    parser.add_argument("--export", metavar="TOURNAMENT_ID", help="Download the summary CSV for a tournament")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    args = parser.parse_args()

    if args.list or args.get or args.export:
        with httpx.Client(base_url=args.base_url) as client:
            if args.list:
                resp = client.get("/tournaments")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.get:
                resp = client.get(f"/tournaments/{args.get}")
                if resp.status_code == 404:
                    raise SystemExit(f"tournament {args.get} not found")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.export:
                resp = client.get(f"/tournaments/{args.export}/summary.csv")
                if resp.status_code == 404:
                    raise SystemExit(f"tournament {args.export} not found")
                resp.raise_for_status()
                if args.export_path:
                    args.export_path.write_text(resp.text)
                    print(f"CSV export saved to {args.export_path}")
                else:
                    print(resp.text)
        return

    if args.report is None:
        raise SystemExit("a report file is required unless using --list/--get/--export")

    files = {"report": (args.report.name, args.report.read_bytes(), "text/plain")}
    data = {"layout": args.layout}

    with httpx.Client(base_url=args.base_url) as client:
        if args.parse_only:
            resp = client.post("/parse", files=files, data=data)
            if resp.status_code == 400:
                raise SystemExit(resp.json()["detail"])
            resp.raise_for_status()
            payload = resp.json()
            print("Report:", json.dumps(payload["report"], indent=2))
            print(f"Received {len(payload['players'])} players and {len(payload['rounds'])} rounds")
            return

        if args.name:
            data["name"] = args.name
        resp = client.post("/tournaments", files=files, data=data)
        if resp.status_code == 400:
            raise SystemExit(resp.json()["detail"])
        resp.raise_for_status()
        print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
