"""ghtimecard CLI - GitHub activity timecards."""

import json
import logging
import sys
from itertools import islice

import click
import requests

from .adapters.github_api import AuthenticationError, RateLimitError
from .config import SUMMARIZERS, load_config
from .core.dates import KEYWORDS, InvalidKeyword
from .core.report import SummaryStyle
from .workflows import build_event_source, run_timecard

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _setup_logging(verbose: bool, debug: bool) -> None:
    if debug:
        logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG)
    elif verbose:
        logging.basicConfig(format=LOG_FORMAT, level=logging.INFO)


@click.group()
@click.version_option()
def main():
    """ghtimecard - summarize your GitHub activity."""
    pass


@main.command()
@click.argument("date_keyword", metavar="DATE")
@click.argument("style", required=False)
@click.argument("repo", required=False, metavar="[OWNER/REPO]")
@click.option("--raw", is_flag=True, help="Print the per-item report instead of the summary")
@click.option("--summarizer", type=click.Choice(SUMMARIZERS), default=None, help="Override the summarizer backend")
@click.option("--verbose", "-v", is_flag=True, help="Log progress")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def report(
    date_keyword: str,
    style: str | None,
    repo: str | None,
    raw: bool,
    summarizer: str | None,
    verbose: bool,
    debug: bool,
):
    """Summarize activity since DATE.

    \b
    DATE:  today, yesterday, last-3days, this-week, last-week, this-month, last-month
    STYLE: executive, technical, detailed
    """
    _setup_logging(verbose, debug)
    config = load_config()
    if summarizer:
        config.summarizer = summarizer

    try:
        result = run_timecard(
            config,
            date_keyword,
            style or config.default_style,
            repo=repo,
            raw=raw,
        )
    except (InvalidKeyword, ValueError, AuthenticationError, RuntimeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except requests.RequestException as e:
        click.echo(f"Error: GitHub request failed: {e}", err=True)
        sys.exit(1)

    if verbose or debug:
        stats = result.stats
        click.echo(
            f"{stats.classified} events from {result.tracked_user} since "
            f"{result.begin:%Y-%m-%d %H:%M} ({stats.ignored} ignored, {stats.filtered} filtered)",
            err=True,
        )
    click.echo(result.timecard)


@main.command("events-debug")
@click.option("--pages", default=1, show_default=True, help="Number of pages to fetch")
@click.option("--user", "username", default=None, help="GitHub user (defaults to the token's owner)")
def events_debug(pages: int, username: str | None):
    """Dump raw GitHub events for debugging."""
    config = load_config()
    try:
        source = build_event_source(config)
        source.max_pages = pages
        username = username or config.github_user or source.authenticated_user()
        raw = [event for page in islice(source.iter_pages(username), pages) for event in page]
    except (AuthenticationError, RateLimitError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except requests.RequestException as e:
        click.echo(f"Error: GitHub request failed: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(raw, indent=2, default=str))


@main.command()
def keywords():
    """List accepted DATE keywords and summary styles."""
    click.echo("Dates:  " + ", ".join(KEYWORDS))
    click.echo("Styles: " + ", ".join(s.value for s in SummaryStyle))


if __name__ == "__main__":
    main()
