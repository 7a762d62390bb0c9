"""Command-line interface for check_zpool."""

import argparse
import sys
from pathlib import Path

from checkzpool import __version__
from checkzpool.core.config import ConfigError, ProbeConfig, load_config
from checkzpool.core.context import Context
from checkzpool.core.logging import ScriptLogger
from checkzpool.core.output import Output
from checkzpool.core.platform import SupportTier, detect_platform
from checkzpool.core.states import Severity, classify_health
from checkzpool.lib.process import CommandError
from checkzpool.zpool.listing import read_pool_summary
from checkzpool.zpool.locations import LocationDirectory
from checkzpool.zpool.report import (
    Verdict,
    build_verdict,
    invocation_failure_verdict,
    not_found_verdict,
)
from checkzpool.zpool.status import read_device_status

USAGE = "Usage: check_zpool <pool> <verbosity 1-3>"

VERBOSITY_LEVELS = (1, 2, 3)


class UsageError(Exception):
    """Bad command line."""

    pass


class ProbeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str):
        raise UsageError(message)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = ProbeArgumentParser(
        prog="check_zpool",
        description="Report the health of one ZFS pool as a Nagios plugin",
        epilog=(
            "Verbosity: 1 = pool summary only, 2 = also unhealthy devices when "
            "the pool is not OK, 3 = every device. "
            "Exit codes: 0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"check_zpool {__version__}",
    )
    parser.add_argument("pool", help="Name of the pool to check")
    parser.add_argument("verbosity", help="Detail level, 1-3")
    parser.add_argument(
        "--format",
        choices=["plain", "json"],
        default="plain",
        help="Output format (default: plain)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML config file (default: ~/.config/check_zpool/config.yaml, /etc/check_zpool.yaml)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Write a JSONL run log under this directory",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help="Timeout in seconds for each zpool command (default: 60)",
    )
    return parser


def parse_args(args: list[str]) -> argparse.Namespace:
    """
    Parse and validate the command line.

    Raises:
        UsageError: On a wrong argument count or a verbosity outside 1-3
    """
    opts = create_parser().parse_args(args)
    try:
        opts.verbosity = int(opts.verbosity)
    except ValueError as e:
        raise UsageError(f"verbosity must be an integer: {opts.verbosity}") from e
    if opts.verbosity not in VERBOSITY_LEVELS:
        raise UsageError(f"verbosity must be 1, 2 or 3: {opts.verbosity}")
    if not opts.pool:
        raise UsageError("pool name must not be empty")
    return opts


def _requested_format(args: list[str]) -> str:
    """The --format value of a command line that may not parse as a whole."""
    parser = ProbeArgumentParser(add_help=False)
    parser.add_argument("--format", choices=["plain", "json"], default="plain")
    try:
        known, _ = parser.parse_known_args(args)
    except UsageError:
        return "plain"
    return known.format


def _finish(output: Output, verdict: Verdict, format: str, logger: ScriptLogger) -> int:
    output.set_verdict(verdict.severity, verdict.message)
    logger.info("Verdict", severity=verdict.severity.name, message=verdict.message)
    logger.close()
    output.render(format)
    return verdict.exit_code


def run(
    args: list[str],
    output: Output,
    context: Context,
    config: ProbeConfig | None = None,
) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context
        config: Pre-resolved settings; loaded from the config files when None

    Returns:
        0 = OK, 1 = WARNING, 2 = CRITICAL, 3 = UNKNOWN
    """
    try:
        opts = parse_args(args)
    except UsageError:
        output.set_usage(USAGE)
        output.render(_requested_format(args))
        return output.exit_code

    if config is None:
        try:
            config = load_config(opts.config)
        except ConfigError as e:
            output.set_verdict(Severity.UNKNOWN, str(e))
            output.render(opts.format)
            return Severity.UNKNOWN.exit_code

    try:
        directory = LocationDirectory(config.locations)
    except ValueError as e:
        output.set_verdict(Severity.UNKNOWN, str(e))
        output.render(opts.format)
        return Severity.UNKNOWN.exit_code

    timeout = opts.timeout if opts.timeout is not None else config.timeout
    logger = ScriptLogger.for_directory(opts.log_dir or config.log_dir)
    logger.info("Checking pool", pool=opts.pool, verbosity=opts.verbosity)
    if logger.failure:
        output.warning(logger.failure)

    platform_info = detect_platform(context, zpool_override=config.zpool)
    if platform_info.tier is SupportTier.UNSUPPORTED:
        output.error(platform_info.notice)
        logger.error("Unsupported platform", system=platform_info.system)
        logger.close()
        output.render(opts.format)
        return Severity.UNKNOWN.exit_code
    if platform_info.tier is SupportTier.BETA:
        output.warning(platform_info.notice)
        logger.warning("Beta platform", system=platform_info.system)

    zpool = platform_info.zpool_path
    pool = opts.pool

    try:
        summary = read_pool_summary(pool, zpool, context, timeout=timeout, logger=logger)
    except CommandError as e:
        logger.error("zpool list could not run", command=e.cmd, reason=e.reason)
        return _finish(output, invocation_failure_verdict(e.command_line), opts.format, logger)

    if summary is None:
        return _finish(output, not_found_verdict(pool), opts.format, logger)

    severity = classify_health(summary.health)

    try:
        walk = read_device_status(
            pool,
            zpool,
            context,
            severity,
            opts.verbosity,
            directory=directory,
            timeout=timeout,
            logger=logger,
        )
    except CommandError as e:
        logger.error("zpool status could not run", command=e.cmd, reason=e.reason)
        return _finish(output, invocation_failure_verdict(e.command_line), opts.format, logger)

    output.emit({
        "pool": {
            "name": summary.name,
            "size": summary.size,
            "used": summary.used,
            "available": summary.available,
            "capacity": summary.capacity,
            "health": summary.health,
            "dedup_ratio": summary.dedup_ratio,
            "fragmentation": summary.fragmentation,
            "expand_size": summary.expand_size,
            "checkpoint": summary.checkpoint,
        },
        "devices": [
            {
                "path": device.path,
                "state": device.state,
                "location": device.location.suffix.lstrip("/") if device.location else None,
                "chassis": device.location.chassis if device.location else None,
            }
            for device in walk.devices
        ],
    })

    return _finish(output, build_verdict(summary, walk), opts.format, logger)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    if argv is None:
        argv = sys.argv[1:]
    return run(argv, Output(), Context())


if __name__ == "__main__":
    sys.exit(main())
