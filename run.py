import argparse
import logging
import sys
from typing import Optional, Sequence

from sitecheck import config as env
from sitecheck.container import Container
from sitecheck.domain.check_settings import CheckSettings
from sitecheck.exceptions import ConfigurationError, SerializationError
from sitecheck.services.job_source import collect_jobs
from sitecheck.services.run_profile import RunProfile, load_run_profile

logger = logging.getLogger("sitecheck")

EXIT_OK = 0
EXIT_WRITE_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitecheck",
        description="Check reachability and response time of URLs concurrently.",
    )
    parser.add_argument("urls", nargs="*", metavar="URL", help="URLs to check")
    parser.add_argument("--file", help="text file with one URL per line (# starts a comment)")
    parser.add_argument("--workers", type=int, help="number of worker threads (default: CPU count)")
    parser.add_argument("--timeout", type=int, help="per-request timeout in seconds (default: 5)")
    parser.add_argument("--retries", type=int, help="re-attempts after a transport error (default: 0)")
    parser.add_argument("--output", help="report path (default: status.json)")
    parser.add_argument("--config", help="YAML run profile with urls/file/workers/timeout/retries/output")
    return parser


def _first_set(*values):
    for v in values:
        if v is not None:
            return v
    return None


def resolve_settings(args: argparse.Namespace, profile: RunProfile, container: Container) -> CheckSettings:
    """CLI flag, then run profile, then environment/default from the container config."""
    cfg = container.config
    return CheckSettings(
        workers=_first_set(args.workers, profile.workers, cfg.SITECHECK_WORKERS()),
        timeout_seconds=_first_set(args.timeout, profile.timeout, cfg.SITECHECK_TIMEOUT()),
        retries=_first_set(args.retries, profile.retries, cfg.SITECHECK_RETRIES()),
        output_path=_first_set(args.output, profile.output, cfg.SITECHECK_OUTPUT()),
    )


def apply_settings(container: Container, settings: CheckSettings) -> None:
    container.config.SITECHECK_WORKERS.from_value(settings.workers)
    container.config.SITECHECK_TIMEOUT.from_value(settings.timeout_seconds)
    container.config.SITECHECK_RETRIES.from_value(settings.retries)
    container.config.SITECHECK_OUTPUT.from_value(settings.output_path)


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if container is None:
        container = Container()

    try:
        profile = load_run_profile(args.config) if args.config else RunProfile()
        settings = resolve_settings(args, profile, container)
        jobs = collect_jobs(args.urls, _first_set(args.file, profile.file), profile.urls)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_CONFIG_ERROR

    apply_settings(container, settings)
    logger.info(
        "Starting with %d workers, timeout %ds, retries %d",
        settings.workers,
        settings.timeout_seconds,
        settings.retries,
    )

    try:
        container.check_runner().run(jobs, settings.output_path)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except SerializationError as e:
        logger.error("%s (%d results not saved)", e, len(e.results))
        return EXIT_WRITE_FAILED

    return EXIT_OK


def cli() -> None:
    logging.basicConfig(
        level=getattr(logging, env.log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(main())


if __name__ == '__main__':
    cli()
