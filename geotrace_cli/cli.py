"""
geotrace CLI - Main entry point.

Replays recorded tracks through a location session and validates session
configuration files.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from geotrace_core import (
    Notice,
    ReplaySource,
    SampleFormatter,
    SessionBuilder,
    SessionConfig,
    SessionUpdate,
)
from geotrace_core.logging import LogEvent, create_logger


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None
) -> Optional[logging.Handler]:
    """
    Setup logging for the CLI.

    Console output goes through the root logger. The log file handler is
    attached to the "geotrace" logger, independent of any existing root
    configuration.

    Args:
        level: Root logging level
        log_file: Optional path to log file

    Returns:
        The file handler, so the caller can close it, or None
    """
    logging.basicConfig(
        level=level,
        format='%(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if log_file is None:
        return None

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter('%(message)s'))
    logging.getLogger("geotrace").addHandler(file_handler)
    return file_handler


def load_config(config_path: Optional[str]) -> SessionConfig:
    """Load SessionConfig from YAML, or defaults when no path is given."""
    if config_path is None:
        return SessionConfig()
    try:
        return SessionConfig.from_yaml(Path(config_path))
    except (FileNotFoundError, ValueError) as e:
        create_logger("cli").error(
            event=LogEvent.CONFIG_ERROR,
            message="Failed to load configuration",
            exc_info=e,
            metadata={'path': config_path}
        )
        raise


def run_replay(args: argparse.Namespace) -> int:
    """Replay a track and print list items, final statistics and region."""
    config = load_config(args.config)
    level = logging.DEBUG if args.verbose else config.logging_level
    file_handler = setup_logging(level, Path(args.log_file) if args.log_file else None)
    try:
        return replay_track(args, config, level)
    finally:
        if file_handler is not None:
            logging.getLogger("geotrace").removeHandler(file_handler)
            file_handler.close()


def replay_track(args: argparse.Namespace, config: SessionConfig, level: int) -> int:
    logger = create_logger("cli", level=level)
    logger.info(
        event=LogEvent.CONFIG_LOADED,
        message="Configuration loaded",
        metadata={'session_id': config.session_id, 'path': args.config}
    )

    formatter = SampleFormatter()
    lines: List[str] = []

    def on_update(update: SessionUpdate) -> None:
        print(formatter.list_item(update.sample))

    def on_notice(notice: Notice) -> None:
        prefix = f"{notice.title}: " if notice.title else ""
        print(f"[{notice.kind.value}] {prefix}{notice.message}", file=sys.stderr)

    source = ReplaySource(
        Path(args.track),
        batch_size=args.batch_size,
        rebase_timestamps=not args.no_rebase,
        logger=create_logger("replay", level=level),
    )
    session = (
        SessionBuilder()
        .with_source(source)
        .with_config(config)
        .with_logger(create_logger("session", level=level))
        .on_update(on_update)
        .on_notice(on_notice)
        .build()
    )
    if args.high_accuracy:
        session.set_high_accuracy(True)

    session.start()
    source.run()
    session.stop()

    lines.append("")
    lines.extend(formatter.stats_lines(session.current_stats()))
    region = session.current_region()
    if region is not None:
        lines.append(formatter.region_line(region))
        lines.append(
            "Center: %.6f, %.6f" % (region.center_lat, region.center_lon)
        )
    print("\n".join(lines))
    return 0


def run_check_config(args: argparse.Namespace) -> int:
    """Validate a configuration file and print the resolved values."""
    config = load_config(args.config)
    print(f"✅ {args.config} is valid")
    print(f"  session_id: {config.session_id}")
    print(
        f"  region: span_factor={config.region.span_factor} "
        f"min_lat_span={config.region.min_lat_span} "
        f"min_lon_span={config.region.min_lon_span} "
        f"max_span={config.region.max_span}"
    )
    print(
        f"  source: distance_filter_m={config.source.distance_filter_m} "
        f"accuracy={config.source.accuracy.value} "
        f"background_updates={config.source.background_updates}"
    )
    print(f"  log_level: {config.log_level}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geotrace-cli",
        description="geotrace CLI - Replay location tracks through a session",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Replay a recorded walk with default settings
  geotrace-cli replay data/tracks/dinamos.jsonl

  # Replay with a config file, three fixes per delivery
  geotrace-cli replay data/tracks/dinamos.jsonl --config config/geotrace.yaml --batch-size 3

  # Validate a config file
  geotrace-cli check-config config/geotrace.yaml
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    replay = subparsers.add_parser('replay', help='Replay a recorded JSON-lines track')
    replay.add_argument('track', help='Path to track file (.jsonl)')
    replay.add_argument('--config', default=None, help='Path to session config YAML')
    replay.add_argument(
        '--batch-size',
        type=int,
        default=1,
        help='Fixes per delivery for single-fix lines (default: 1)'
    )
    replay.add_argument(
        '--no-rebase',
        action='store_true',
        help='Keep recorded timestamps instead of shifting them to now'
    )
    replay.add_argument(
        '--high-accuracy',
        action='store_true',
        help='Request best-for-navigation accuracy'
    )
    replay.add_argument('--log-file', default=None, help='Also write logs to this file')
    replay.add_argument('-v', '--verbose', action='store_true', help='Per-sample debug logs')

    check = subparsers.add_parser('check-config', help='Validate a session config YAML')
    check.add_argument('config', help='Path to session config YAML')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'replay':
            return run_replay(args)
        elif args.command == 'check-config':
            return run_check_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    return 1


if __name__ == '__main__':
    sys.exit(main())
