"""CLI entrypoint for wiki crawl execution."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

import yaml  # type: ignore

from wikirag.crawler import CrawlConfig, Pipeline, SessionError, load_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Crawl the wiki and export every page as markdown.",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to JSON/YAML crawl config.",
    )
    parser.add_argument(
        "--output_dir",
        type=Path,
        default=None,
        help="Directory for page and summary markdown files (default from config).",
    )
    parser.add_argument("--base_url", type=str, default=None)
    parser.add_argument("--username", type=str, default=None)
    parser.add_argument(
        "--entry_id",
        type=str,
        default=None,
        help="Page identifier the crawl starts from.",
    )
    parser.add_argument(
        "--secret_env",
        type=str,
        default=None,
        help="Environment variable holding the login password.",
    )
    parser.add_argument("--timeout_seconds", type=float, default=None)

    parser.add_argument(
        "--print_stats_json",
        action="store_true",
        help="Print full stats JSON in stdout after run.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging.",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CrawlConfig:
    if args.config is not None:
        payload = load_config(args.config).to_dict()
    else:
        payload = {}

    if args.output_dir is not None:
        payload["output_dir"] = str(args.output_dir)
    if args.base_url is not None:
        payload["base_url"] = args.base_url
    if args.username is not None:
        payload["username"] = args.username
    if args.entry_id is not None:
        payload["entry_id"] = args.entry_id
    if args.secret_env is not None:
        payload["secret_env"] = args.secret_env
    if args.timeout_seconds is not None:
        payload["timeout_seconds"] = args.timeout_seconds

    return CrawlConfig.from_dict(payload)


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "crawl.log"

# Connection pool chatter drowns out the per-page "Getting ..." lines.
QUIET_LOGGERS = ("urllib3", "charset_normalizer")

STATS_LABELS = (
    ("fetched_ok", "pages fetched"),
    ("fetched_not_found", "pages missing"),
    ("converted_error", "pages failed"),
    ("stored_docs", "page files"),
    ("stored_summaries", "summary files"),
    ("frontier_skipped_visited", "links already visited"),
    ("frontier_skipped_pending", "links already queued"),
    ("fetch_elapsed_ms_total", "fetch time (ms)"),
)


def setup_logging(output_dir: Path, verbose: bool) -> Path:
    """Log to stdout and to `<output_dir>/logs/crawl.log`; return the log path.

    The log lives in a subdirectory so the flat page/summary file set stays clean.
    """

    log_level = logging.DEBUG if verbose else logging.INFO
    log_path = output_dir / "logs" / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(log_path, encoding="utf-8"),
    ]

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(log_level)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_path


def print_summary(result: dict[str, Any], *, print_stats_json: bool) -> None:
    output_dir = Path(result.get("paths", {}).get("output_dir", "."))
    stats = result.get("stats", {})
    summaries = result.get("summaries", [])

    print(f"\n=== Wiki export written to {output_dir} ===")
    for key, label in STATS_LABELS:
        if key in stats:
            print(f"{label}: {stats[key]}")

    if summaries:
        print("\n--- Category summaries ---")
        for path in summaries:
            print(Path(path).name)

    failed = stats.get("failed_ids") or []
    if failed:
        print("\n--- Pages skipped after conversion errors ---")
        for identifier in failed:
            print(identifier)

    if print_stats_json:
        print("\n--- Full Stats JSON ---")
        print(json.dumps(stats, indent=2, sort_keys=True))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        config = build_config(args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Invalid crawl config: {exc}", file=sys.stderr)
        return 2

    log_path = setup_logging(Path(config.output_dir), verbose=args.verbose)

    try:
        secret = config.read_secret()
    except ValueError as exc:
        logging.error("Cannot log in to %s: %s", config.base_url, exc)
        return 2

    logging.info(
        "Exporting %s from '%s' into %s (log: %s)",
        config.base_url,
        config.entry_id,
        config.output_dir,
        log_path,
    )

    try:
        result = Pipeline(config).run(secret)
    except KeyboardInterrupt:
        logging.error("Interrupted; pages written so far stay in %s", config.output_dir)
        return 130
    except SessionError:
        logging.exception("Wiki session failed, aborting crawl")
        return 1
    except Exception:
        logging.exception("Pipeline execution failed")
        return 1

    print_summary(result, print_stats_json=args.print_stats_json)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
