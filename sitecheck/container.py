"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from sitecheck import config as env
from sitecheck.domain.check_settings import (
    DEFAULT_OUTPUT_PATH,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
    default_workers,
)
from sitecheck.services.check_runner import CheckRunner
from sitecheck.services.dispatcher import Dispatcher
from sitecheck.services.http_service import HttpService
from sitecheck.services.report_serializer import ReportSerializer
from sitecheck.services.retry_policy import DEFAULT_RETRY_DELAY_SECONDS, RetryPolicy
from sitecheck.services.worker_pool import WorkerPool


# Environment variables used by the container (read via `sitecheck.config` helpers).
#
# Command-line flags and run profiles take precedence; `run.py` writes the
# resolved values back into this configuration before building services.
#
# USER_AGENT (str, default: "sitecheck/0.1")
#   User-Agent header for outbound HTTP requests.
#
# SITECHECK_WORKERS (int, default: number of CPUs)
#   Number of worker threads.
#
# SITECHECK_TIMEOUT (int seconds, default: 5)
#   Timeout applied to each HTTP attempt.
#
# SITECHECK_RETRIES (int, default: 0)
#   Re-attempts after a transport failure.
#
# SITECHECK_RETRY_DELAY (float seconds, default: 0.1)
#   Fixed pause between attempts for the same URL.
#
# SITECHECK_OUTPUT (str, default: "status.json")
#   Where the JSON report is written.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "sitecheck/0.1"),
    "SITECHECK_WORKERS": env.get_int_env("SITECHECK_WORKERS", default_workers()),
    "SITECHECK_TIMEOUT": env.get_int_env("SITECHECK_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
    "SITECHECK_RETRIES": env.get_int_env("SITECHECK_RETRIES", DEFAULT_RETRIES),
    "SITECHECK_RETRY_DELAY": env.get_float_env("SITECHECK_RETRY_DELAY", DEFAULT_RETRY_DELAY_SECONDS),
    "SITECHECK_OUTPUT": env.get_str_env("SITECHECK_OUTPUT", DEFAULT_OUTPUT_PATH),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the sitecheck application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # One client shared read-only by every worker
    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.SITECHECK_TIMEOUT.as_(int),
    )

    retry_policy = providers.Factory(
        RetryPolicy,
        fetcher=http_service,
        retries=config.SITECHECK_RETRIES.as_(int),
        delay_seconds=config.SITECHECK_RETRY_DELAY.as_(float),
    )

    dispatcher = providers.Factory(Dispatcher)

    worker_pool = providers.Factory(
        WorkerPool,
        checker=retry_policy,
        workers=config.SITECHECK_WORKERS.as_(int),
        dispatcher=dispatcher,
    )

    report_serializer = providers.Singleton(
        ReportSerializer
    )

    check_runner = providers.Factory(
        CheckRunner,
        worker_pool=worker_pool,
        serializer=report_serializer,
    )
