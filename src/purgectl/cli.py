import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

import httpx


def _print_json(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=True))
    sys.stdout.write("\n")


def _read_urls(path: str) -> list[str]:
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


def _call(method: str, url: str, payload: Optional[dict] = None) -> int:
    try:
        resp = httpx.request(method, url, json=payload, timeout=60)
        resp.raise_for_status()
        data = resp.json()
    except Exception as exc:
        _print_json({"status": "error", "error": str(exc)})
        return 1
    _print_json(data)
    results = data.get("results") if isinstance(data, dict) else None
    if results and not all(r.get("succeeded") for r in results):
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="purgectl")
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:7600",
        help="Base URL for the edgepurge service",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Check service health")
    everything_parser = subparsers.add_parser(
        "everything", help="Purge everything for a domain"
    )
    everything_parser.add_argument("--domain", required=True)
    pages_parser = subparsers.add_parser("pages", help="Purge a list of urls")
    pages_parser.add_argument("--url", action="append", dest="urls", default=[])
    pages_parser.add_argument("--file", help="Path to a file with one url per line")
    subparsers.add_parser("zones", help="List zones visible to the credentials")

    args = parser.parse_args(argv)
    base_url = args.base_url.rstrip("/")

    if args.command == "health":
        raise SystemExit(_call("GET", f"{base_url}/health"))
    if args.command == "everything":
        raise SystemExit(
            _call("POST", f"{base_url}/v1/purge_everything", {"domain": args.domain})
        )
    if args.command == "pages":
        urls = list(args.urls)
        if args.file:
            try:
                urls.extend(_read_urls(args.file))
            except OSError as exc:
                _print_json({"status": "error", "error": f"Cannot read urls: {exc}"})
                raise SystemExit(1)
        if not urls:
            _print_json({"status": "error", "error": "Provide --url or --file"})
            raise SystemExit(1)
        raise SystemExit(_call("POST", f"{base_url}/v1/purge_pages", {"urls": urls}))
    if args.command == "zones":
        raise SystemExit(_call("GET", f"{base_url}/v1/zones"))


if __name__ == "__main__":
    main()
