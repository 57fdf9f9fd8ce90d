"""Summary CLI: daily workflow-run and job statistics."""
import argparse

from modules.context import add_common_arguments, finish, open_context, setup_logging

from .service import SummaryService


def main(argv=None):
    parser = argparse.ArgumentParser(description='Build daily summary CSVs')
    parser.add_argument('target', choices=['workflow_runs', 'jobs'])
    parser.add_argument('--locale', help='Number/date locale (default: from config)')
    parser.add_argument('--strict', action='store_true', help='Fail on unknown conclusions')
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    def command():
        end = args.end or args.start
        with open_context(args.config) as ctx:
            service = SummaryService(ctx.store, locale=args.locale, strict=args.strict)
            if args.target == 'workflow_runs':
                paths = service.build_workflow_runs_summary_from_range(args.start, end, args.fetch)
            else:
                paths = service.build_jobs_summary_from_range(args.start, end, args.fetch)
            for path in paths:
                print(f'📊 {path}')

    finish(command)


if __name__ == '__main__':
    main()
