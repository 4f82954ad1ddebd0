#!/usr/bin/env python3
"""Command-line entry point: search jobs and manage saved / applied ids."""
from __future__ import annotations

import argparse
import json
import sys

from jobhub.log import get_logger
from jobhub.models import LoadingState, SearchFilters
from jobhub.session import JobHubSession
from jobhub.store import APPLIED_KEY, SAVED_KEY, IdStore, toggle

log = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Taiwan Job Hub")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="run one search and print the visible jobs")
    search.add_argument("--title", default="", help="job title scope")
    search.add_argument("--industry", action="append", default=[], help="repeatable")
    search.add_argument("--location", action="append", default=[], help="repeatable")
    search.add_argument("--experience", action="append", default=[], help="repeatable")
    search.add_argument("--json", action="store_true", help="print jobs as JSON")

    for name, help_text in (("save", "toggle a job's saved flag"), ("apply", "toggle a job's applied flag")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("job_id")

    sub.add_parser("list", help="show saved and applied ids")
    return parser


def _cmd_search(args: argparse.Namespace) -> int:
    filters = SearchFilters(
        job_title=args.title,
        industries=tuple(args.industry),
        locations=tuple(args.location),
        experience_levels=tuple(args.experience),
    )
    hub = JobHubSession(filters=filters)
    try:
        hub.start()
        if hub.state is LoadingState.ERROR:
            print(hub.error, file=sys.stderr)
            return 1

        views = hub.views
        if args.json:
            print(json.dumps([j.to_dict() for j in views.visible], ensure_ascii=False, indent=2))
            return 0

        print(f"{views.visible_count} job(s) · saved {views.saved_count} · applied {views.applied_count}")
        for job in views.visible:
            flag = "*" if hub.is_saved(job.id) else " "
            print(f" {flag} [{job.id}] {job.title} — {job.company} ({job.location}) [{job.source.value}]")
            print(f"     {job.link}")
        return 0
    finally:
        hub.close()


def _cmd_toggle(args: argparse.Namespace) -> int:
    key = SAVED_KEY if args.command == "save" else APPLIED_KEY
    store = IdStore()
    ids = toggle(store.load(key), args.job_id)
    if not store.save(key, ids):
        print("warning: could not persist the change", file=sys.stderr)
    label = "saved" if args.command == "save" else "applied"
    if args.job_id not in ids:
        label = "not " + label
    print(f"{args.job_id}: {label}")
    return 0


def _cmd_list(_: argparse.Namespace) -> int:
    store = IdStore()
    for label, key in (("Saved", SAVED_KEY), ("Applied", APPLIED_KEY)):
        ids = sorted(store.load(key))
        print(f"{label} ({len(ids)}): {', '.join(ids) if ids else '—'}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.command == "search":
        return _cmd_search(args)
    if args.command in ("save", "apply"):
        return _cmd_toggle(args)
    return _cmd_list(args)


if __name__ == "__main__":
    sys.exit(main())
