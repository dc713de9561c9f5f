"""Command line interface for searching, filtering and curating leads."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from .catalog import ALL_BUCKETS
from .config import ConfigurationError, Settings, load_settings
from .factory import build_offline_session, build_session
from .ingestion.exporters import default_template_name, export_leads, write_template
from .models import Lead, Notification, SearchQuery
from .offline import OfflineCriteria
from .session import LeadFinderSession

LOGGER = logging.getLogger(__name__)


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Find, enrich and curate B2B leads from Apollo.io or an uploaded spreadsheet",
    )
    parser.add_argument("--config", help="Path to a configuration file (YAML or JSON)")
    parser.add_argument("--storage", help="Override the saved-leads storage file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search Apollo.io for people by job title")
    search.add_argument("--title", required=True, help="Job title to search for (any language)")
    search.add_argument("--location", default="", help="Location filter")
    search.add_argument("--industry", default="", help="Industry filter")
    search.add_argument("--company", default="", help="Organisation name filter")
    search.add_argument("--count", type=int, default=10, help="Number of leads to return (1-100)")
    search.add_argument("--no-enrich", action="store_true", help="Skip AI employee count enrichment")
    search.add_argument("--qualified", action="store_true", help="Only keep leads that pass the qualification checks")
    search.add_argument("--save", action="store_true", help="Save every result to the saved leads")
    search.add_argument("--output", help="Write the results to a CSV or XLSX file")

    offline = commands.add_parser("offline", help="Filter leads from a CSV/XLSX upload")
    offline.add_argument("file", help="Spreadsheet to filter")
    offline.add_argument("--title", default="", help="Job title filter")
    offline.add_argument("--location", default="", help="Location filter, matched against 'City, State'")
    offline.add_argument("--industry", default="", help="Industry filter")
    offline.add_argument("--employees", default=ALL_BUCKETS, help="Employee bucket such as 51-200, or 'all'")
    offline.add_argument("--limit", type=int, default=10, help="Maximum number of results")
    offline.add_argument("--save", action="store_true", help="Save every result to the saved leads")
    offline.add_argument("--output", help="Write the results to a CSV or XLSX file")

    person = commands.add_parser("person", help="Look up one person by name and organisation")
    person.add_argument("--first-name", required=True)
    person.add_argument("--last-name", required=True)
    person.add_argument("--organization", default="", help="Organisation name")
    person.add_argument("--domain", default="", help="Organisation website domain")
    person.add_argument("--save", action="store_true", help="Save the matched person")

    saved = commands.add_parser("saved", help="Manage saved leads")
    saved_commands = saved.add_subparsers(dest="saved_command", required=True)
    saved_commands.add_parser("list", help="Print the saved leads")
    export = saved_commands.add_parser("export", help="Export saved leads to CSV or XLSX")
    export.add_argument("path", nargs="?", help="Destination file (defaults to linkedin_leads_<date>.csv)")
    remove = saved_commands.add_parser("remove", help="Remove one saved lead")
    remove.add_argument("lead_id")
    clear = saved_commands.add_parser("clear", help="Remove every saved lead")
    clear.add_argument("--yes", action="store_true", help="Confirm removing every saved lead")

    template = commands.add_parser("template", help="Write the offline upload template")
    template.add_argument("path", nargs="?", help="Destination .xlsx file")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    if args.storage:
        settings.storage_path = Path(args.storage)
    return settings


def _report(notification: Notification) -> int:
    stream = sys.stderr if notification.is_error else sys.stdout
    print(f"[{notification.type}] {notification.message}", file=stream)
    return 1 if notification.is_error else 0


def _print_leads(leads: Sequence[Lead]) -> None:
    for lead in leads:
        print(
            "\t".join(
                [
                    lead.id,
                    lead.display_name(),
                    lead.display_title(),
                    lead.company,
                    lead.location,
                    lead.industry,
                    lead.employee_count,
                    lead.email or "",
                ]
            )
        )


def _finish(session: LeadFinderSession, args: argparse.Namespace, notification: Notification) -> int:
    status = _report(notification)
    if status or not session.results:
        return status
    _print_leads(session.results)
    if args.output:
        path = export_leads(session.results, args.output, detailed=True)
        LOGGER.info("Results written to %s", path.resolve())
    if args.save:
        status = _report(session.save_selected(lead.id for lead in session.results))
    return status


async def _run_search(args: argparse.Namespace, settings: Settings) -> int:
    app = build_session(settings)
    try:
        query = SearchQuery(
            job_title=args.title,
            location=args.location,
            industry=args.industry,
            count=args.count,
            company=args.company,
        )
        notification = await app.session.search(query, enrich=not args.no_enrich)
        if args.qualified and not notification.is_error:
            app.session.results = app.session.qualified_results()
        return _finish(app.session, args, notification)
    finally:
        await app.aclose()


async def _run_person(args: argparse.Namespace, settings: Settings) -> int:
    app = build_session(settings)
    try:
        lookup = await app.session.lookup_person(args.first_name, args.last_name, args.organization, args.domain)
        status = _report(lookup.notification)
        if lookup.lead is not None:
            _print_leads([lookup.lead])
            if args.save:
                status = _report(app.session.save_selected([lookup.lead.id]))
        if lookup.description:
            print(lookup.description)
        return status
    finally:
        await app.aclose()


def _run_offline(args: argparse.Namespace, settings: Settings) -> int:
    session = build_offline_session(settings)
    loaded = session.load_offline(args.file)
    if loaded.is_error:
        return _report(loaded)
    LOGGER.info(loaded.message)
    criteria = OfflineCriteria(
        job_title=args.title,
        location=args.location,
        industry=args.industry,
        employees=args.employees,
        limit=args.limit,
    )
    return _finish(session, args, session.offline_search(criteria))


def _run_saved(args: argparse.Namespace, settings: Settings) -> int:
    session = build_offline_session(settings)
    if args.saved_command == "list":
        _print_leads(session.store.leads)
        LOGGER.info("%s saved leads", len(session.store))
        return 0
    if args.saved_command == "export":
        return _report(session.export_saved(args.path))
    if args.saved_command == "remove":
        return _report(session.remove_saved(args.lead_id))
    return _report(session.clear_saved(confirmed=args.yes))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    if args.command == "template":
        path = write_template(args.path or default_template_name())
        LOGGER.info("Template written to %s", path.resolve())
        return 0

    try:
        settings = _settings(args)
        if args.command == "search":
            return asyncio.run(_run_search(args, settings))
        if args.command == "person":
            return asyncio.run(_run_person(args, settings))
        if args.command == "offline":
            return _run_offline(args, settings)
        return _run_saved(args, settings)
    except ConfigurationError as exc:
        LOGGER.error("%s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
