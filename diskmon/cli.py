"""diskmon CLI - Main entry point.

Loads the configuration, optionally adds one target from the command line,
validates everything and then either runs the monitor loop until SIGINT or
SIGTERM, or does a single sweep with --once.
"""

import argparse
import logging
import sys

from rich.console import Console

from diskmon import __version__
from diskmon.config import TargetConfig, load_app_config
from diskmon.exceptions import ConfigError
from diskmon.logger import crash, setup_logging
from diskmon.manager import CheckManager
from diskmon.report import render_report
from diskmon.scheduler import Scheduler

logger = logging.getLogger("diskmon.cli")

console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_CHECK_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_CRASH = 12


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diskmon",
        description="diskmon running options",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  diskmon -c /etc/diskmon.yaml               # Watch the targets in a config file
  diskmon -p / -t 0.9                        # Alert when / is more than 90% used
  diskmon -p /var -m capacity_rate -t 0.8 --once
""",
    )
    parser.add_argument("-c", "--config", help="Path to Config")
    parser.add_argument("-p", "--mount-point", help="Mount path to check")
    parser.add_argument("-m", "--check-method", help="How to check the mount point")
    parser.add_argument("-t", "--threshold", help="Check threshold")
    parser.add_argument("-i", "--interval", help="Poll interval, e.g. 10s or 1m (default: 10s)")
    parser.add_argument(
        "--once", action="store_true", help="Run a single sweep, print a report and exit"
    )
    parser.add_argument("--version", "-V", action="version", version=f"diskmon {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the diskmon CLI."""
    args = create_parser().parse_args(argv)

    handle = None
    try:
        try:
            config = load_app_config(args.config)
            if args.mount_point:
                config.add_target(
                    TargetConfig(
                        mount_point=args.mount_point,
                        check_method=args.check_method or "",
                        threshold=args.threshold or "",
                    )
                )
            if args.interval:
                config.interval = args.interval
            config.validate()
        except ConfigError as e:
            err_console.print(f"Error: {e}", style="red")
            return EXIT_CONFIG_ERROR

        handle = setup_logging(config.logger)
        logger.debug("Loaded disk usage daemon monitoring tool config, config: %r", config)

        managers = [CheckManager.from_target(target) for target in config.targets]
        if not managers:
            logger.warning("No targets configured, nothing to check")
        scheduler = Scheduler(managers, config.get_interval())

        if args.once:
            events = scheduler.sweep()
            render_report(events, console)
            return EXIT_OK if all(event.ok for event in events) else EXIT_CHECK_FAILED

        scheduler.run()
        return EXIT_OK
    except Exception as e:
        # Before setup_logging this reaches stderr through logging's last resort handler
        crash("%s", e, exc_info=True)
        return EXIT_CRASH
    finally:
        if handle is not None:
            handle.flush()
            handle.close()


if __name__ == "__main__":
    sys.exit(main())
