import argparse
import sys
from pathlib import Path

from ghmilestones.config import load_refresh_config
from ghmilestones.errors import ConfigError, GitHubAPIError
from ghmilestones.github.client import GitHubClient
from ghmilestones.logging_config import setup_logging
from ghmilestones.reports.registry import MILESTONES_REPORT, ReportDispatcher, build_default_registry
from ghmilestones.reports.render_md import render_markdown, write_report
from ghmilestones.store import SnapshotStore


def _snapshot_location(args, config):
    if args.snapshot:
        path = Path(args.snapshot)
        return SnapshotStore(path.parent), path.name
    store = SnapshotStore()
    return store, store.key_for(config)


def cmd_refresh(args):
    try:
        config = load_refresh_config(args.config)
        store, key = _snapshot_location(args, config)
        dispatcher = ReportDispatcher(build_default_registry())
        result = dispatcher.refresh(MILESTONES_REPORT, config, GitHubClient(token=args.token))
        snapshot_path = store.save(key, result)
    except (ConfigError, GitHubAPIError) as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"✓ Refreshed {len(result.milestones)} milestones")
    print(f"  Open: {result.open_count}")
    print(f"  Closed: {result.closed_count}")
    print(f"  Snapshot: {snapshot_path}")


def cmd_render(args):
    try:
        config = load_refresh_config(args.config)
    except ConfigError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    store, key = _snapshot_location(args, config)
    result = store.load(key)
    if result is None:
        print(f"✗ No snapshot found at {store.path_for(key)}; run 'refresh' first", file=sys.stderr)
        sys.exit(1)

    if args.format == "markdown":
        content = render_markdown(result)
    else:
        dispatcher = ReportDispatcher(build_default_registry())
        content = dispatcher.render(MILESTONES_REPORT, result, config)

    if args.output:
        report_path = write_report(content, Path(args.output))
        print(f"✓ Report generated: {report_path}")
    else:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")


def main(argv=None):
    parser = argparse.ArgumentParser(description="ghmilestones: GitHub milestones report")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    refresh_parser = subparsers.add_parser("refresh", help="Fetch milestones and store a snapshot")
    refresh_parser.add_argument("--config", required=True, help="Path to JSON refresh config")
    refresh_parser.add_argument("--snapshot", help="Snapshot file (default: cache directory)")
    refresh_parser.add_argument("--token", help="GitHub token (default: $GITHUB_TOKEN)")

    render_parser = subparsers.add_parser("render", help="Render a stored snapshot")
    render_parser.add_argument("--config", required=True, help="Path to JSON refresh config")
    render_parser.add_argument("--snapshot", help="Snapshot file (default: cache directory)")
    render_parser.add_argument(
        "--format", default="html", choices=["html", "markdown"], help="Output format (default: html)"
    )
    render_parser.add_argument("--output", help="Write to this file instead of stdout")

    args = parser.parse_args(argv)
    setup_logging(args.log_level.upper())

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "refresh":
        cmd_refresh(args)
    elif args.command == "render":
        cmd_render(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
