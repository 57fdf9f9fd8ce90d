"""Failures CLI: failed/cancelled job lists and their merge."""
import argparse

from modules.context import add_common_arguments, finish, open_context, setup_logging

from .service import FailureService


def main(argv=None):
    parser = argparse.ArgumentParser(description='List failed and cancelled jobs per day')
    parser.add_argument('target', choices=['jobs'])
    parser.add_argument('--delimiter', help='CSV delimiter (default: from config, ";")')
    parser.add_argument('--locale', help='Number/date locale (default: from config)')
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    def command():
        with open_context(args.config) as ctx:
            service = FailureService(ctx.store, delimiter=args.delimiter, locale=args.locale)
            for path in service.build_failed_jobs_from_range(args.start, args.end or args.start, args.fetch):
                print(f'❌ {path}')

    finish(command)


def merge_main(argv=None):
    parser = argparse.ArgumentParser(description='Merge daily failed-job lists over a date range')
    add_common_arguments(parser, fetch=False)
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    def command():
        with open_context(args.config) as ctx:
            print(f'❌ {FailureService(ctx.store).merge_failures(args.start, args.end or args.start)}')

    finish(command)


if __name__ == '__main__':
    main()
