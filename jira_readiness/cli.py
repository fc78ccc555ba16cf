"""Command line entry point: write the epic readiness report of a search profile as TSV.

Usage:
  jira-readiness -c config.yaml -p PROFILE -u USERNAME [-z Europe/Rome] > report.tsv

The password is read from the ``PASSWORD`` environment variable, or prompted
for when running on a terminal.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import os
import sys

import pytz

from jira_readiness.core.config import PASSWORD_ENV_VARIABLE, TIMEZONE
from jira_readiness.core.jira_client import JiraAPI
from jira_readiness.core.profiles import load_configuration
from jira_readiness.core.service import IssueService
from jira_readiness.report.components import ComponentsCollection
from jira_readiness.report.emitter import build_report_frame, write_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="jira-readiness",
        description="Assess the readiness of Jira epics and emit a spreadsheet friendly TSV report.",
    )
    ap.add_argument("-c", "--config", required=True, help="Configuration file")
    ap.add_argument("-p", "--profile", required=True, help="Search profile")
    ap.add_argument("-u", "--username", required=True, help="Jira username")
    ap.add_argument(
        "-z",
        "--timezone",
        default=TIMEZONE,
        help="Time zone of report dates (default: the offset Jira returned)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def get_password(env: str = PASSWORD_ENV_VARIABLE, interactive: bool = True) -> str:
    password = os.environ.get(env, "")
    if interactive and not password and sys.stdin.isatty():
        password = getpass.getpass("Password: ")
    return password


def main(argv: list[str] | None = None, service: IssueService | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.timezone:
        try:
            pytz.timezone(args.timezone)
        except pytz.UnknownTimeZoneError:
            ap.error(f"unknown time zone '{args.timezone}'")

    try:
        config = load_configuration(args.config)
    except FileNotFoundError:
        ap.error(f"configuration file '{args.config}' not found")
    profile = config.find_profile(args.profile)
    if profile is None:
        ap.error(f"profile '{args.profile}' not found")

    if service is None:
        api = JiraAPI(config.instance_url, args.username, get_password())
        service = IssueService(api)

    logger.info("JQL = %s", profile.jql)
    epics = service.find_epics(profile.jql)

    components = ComponentsCollection(profile.include_components)
    components.add_issues(epics)

    frame = build_report_frame(components, exclude=profile.exclude_components, tz=args.timezone)
    write_report(frame, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
