"""Load CLI: fetch raw snapshots from GitHub."""
import argparse

from modules.context import add_common_arguments, finish, open_context, setup_logging


def main(argv=None):
    parser = argparse.ArgumentParser(description='Load raw GitHub Actions data per day')
    parser.add_argument('target', choices=['workflows', 'workflow_runs', 'jobs'])
    parser.add_argument('--id', dest='workflow_id', help='Single workflow id, e.g. ci.yml (workflow_runs only)')
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    def command():
        end = args.end or args.start
        with open_context(args.config) as ctx:
            if args.target == 'workflows':
                ctx.store.load_workflows_from_range(args.start, end)
            elif args.target == 'workflow_runs':
                ctx.store.load_workflow_runs_from_range(
                    args.start, end, with_fetch=args.fetch, workflow_id=args.workflow_id
                )
            else:
                ctx.store.load_jobs_from_range(args.start, end, with_fetch=args.fetch)

    finish(command)


if __name__ == '__main__':
    main()
