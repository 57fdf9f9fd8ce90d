#!/usr/bin/env python3
"""Unified CLI for GitHub Actions analytics.

Usage:
    python cli.py load --help
    python cli.py summary --help
    python cli.py report --help
    python cli.py failures --help
    python cli.py merge_failures --help
"""
import argparse


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='📈 GitHub Actions Analytics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  load            Fetch raw workflows / workflow runs / jobs per day
  summary         Daily run and job statistics as CSV
  report          Daily summaries merged over a date range
  failures        Failed and cancelled jobs per day
  merge_failures  Daily failure lists merged over a date range

Examples:
  python cli.py load workflow_runs --from 2024-03-01 --to 2024-03-07 --fetch
  python cli.py load workflow_runs --id ci.yml --from yesterday
  python cli.py summary jobs --from 2024-03-01 --to 2024-03-07 --fetch
  python cli.py report workflow_runs_last_days --days 14
  python cli.py failures jobs --from yesterday --delimiter , --locale en-US
  python cli.py merge_failures --from 2024-03-01 --to 2024-03-07

Environment:
  GH_REPO_OWNER, GH_REPO_NAME, GH_AUTH_TOKEN (required, .env supported)
"""
    )

    parser.add_argument(
        'command',
        choices=['load', 'summary', 'report', 'failures', 'merge_failures'],
        help='Command to run'
    )
    parser.add_argument('args', nargs=argparse.REMAINDER, help='Command arguments')

    # Parse just the command, pass rest to its module
    args = parser.parse_args(argv)
    remaining = args.args

    if args.command == 'load':
        from modules.loading.cli import main as load_main
        load_main(remaining)

    elif args.command == 'summary':
        from modules.summary.cli import main as summary_main
        summary_main(remaining)

    elif args.command == 'report':
        from modules.reporting.cli import main as report_main
        report_main(remaining)

    elif args.command == 'failures':
        from modules.failures.cli import main as failures_main
        failures_main(remaining)

    elif args.command == 'merge_failures':
        from modules.failures.cli import merge_main
        merge_main(remaining)


if __name__ == '__main__':
    main()
