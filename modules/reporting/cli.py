"""Report CLI: daily summaries merged over a date range."""
import argparse

from modules.context import add_common_arguments, finish, open_context, setup_logging
from modules.summary.service import SummaryService

from .service import REPORT_KINDS, ReportService

LAST_DAYS_SUFFIX = '_last_days'


def main(argv=None):
    parser = argparse.ArgumentParser(description='Build multi-day reports')
    parser.add_argument(
        'target',
        choices=[*REPORT_KINDS, *(f'{kind}{LAST_DAYS_SUFFIX}' for kind in REPORT_KINDS)],
    )
    parser.add_argument('--days', type=int, default=7, help='Number of days for *_last_days (default: 7)')
    parser.add_argument('--locale', help='Number/date locale (default: from config)')
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    def command():
        with open_context(args.config) as ctx:
            reports = ReportService(SummaryService(ctx.store, locale=args.locale))
            if args.target.endswith(LAST_DAYS_SUFFIX):
                kind = args.target[: -len(LAST_DAYS_SUFFIX)]
                path = reports.build_last_days_report(kind, args.days, args.fetch)
            else:
                path = reports.build_report(args.target, args.start, args.end or args.start, args.fetch)
            print(f'📊 {path}')

    finish(command)


if __name__ == '__main__':
    main()
