"""Shared command plumbing: context, common options, error reporting.

Every command gets its collaborators (config, GitHub client, raw store)
from an explicit AnalyticsContext instead of module-level singletons.
"""

import argparse
import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import httpx

from common.config import AnalyticsConfig, load_config
from common.errors import AnalyticsError
from modules.github.client import ActionsClient
from modules.loading.service import RawStore

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsContext:
    config: AnalyticsConfig
    client: ActionsClient
    store: RawStore


@contextmanager
def open_context(
    config_path: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Iterator[AnalyticsContext]:
    """Load and validate config, open one API client for the command."""
    config = load_config(config_path).require()
    with ActionsClient(config.github, transport=transport) as client:
        yield AnalyticsContext(
            config=config,
            client=client,
            store=RawStore(config, client=client),
        )


def add_common_arguments(parser: argparse.ArgumentParser, fetch: bool = True):
    """Range, config and logging options; --fetch only where raw data is read."""
    parser.add_argument(
        "--from",
        dest="start",
        default="yesterday",
        help='First day (YYYY-MM-DD, "yesterday" or "today", default: yesterday)',
    )
    parser.add_argument(
        "--to",
        dest="end",
        default=None,
        help="Last day, inclusive (default: same as --from)",
    )
    if fetch:
        parser.add_argument(
            "--fetch",
            action="store_true",
            help="Load missing raw data from GitHub instead of failing",
        )
    parser.add_argument("--config", default=None, help="YAML config path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_command(command: Callable[[], object]) -> int:
    """Run a command, turning fatal errors into exit status 1."""
    try:
        command()
    except AnalyticsError as e:
        logger.error(str(e))
        return 1
    except httpx.HTTPError as e:
        logger.error(f"GitHub API request failed: {e}")
        return 1
    return 0


def finish(command: Callable[[], object]):
    """Run a command and exit the process with its status."""
    sys.exit(run_command(command))
