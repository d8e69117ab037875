import logging
from pathlib import Path
from typing import Iterable, List, Optional

from sitecheck.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def read_url_file(path) -> List[str]:
    """Read URLs from a plain-text file, one per line.

    Blank lines and lines starting with ``#`` are skipped.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read file {path}: {e}") from e
    return parse_url_lines(content.splitlines())


def parse_url_lines(lines: Iterable[str]) -> List[str]:
    urls = []
    for line in lines:
        trimmed = line.strip()
        if trimmed and not trimmed.startswith("#"):
            urls.append(trimmed)
    return urls


def collect_jobs(
    urls: Optional[Iterable[str]] = None,
    file_path=None,
    extra_urls: Optional[Iterable[str]] = None,
) -> List[str]:
    """Build the ordered job list: positional URLs, then file URLs, then extras.

    Duplicates are kept; each one is checked independently.
    """
    jobs = [u.strip() for u in (urls or []) if u and u.strip()]
    if file_path is not None:
        from_file = read_url_file(file_path)
        logger.debug("Read %d URLs from %s", len(from_file), file_path)
        jobs.extend(from_file)
    jobs.extend(u.strip() for u in (extra_urls or []) if u and u.strip())
    if not jobs:
        raise ConfigurationError("No URLs provided. Use --file or provide URLs as arguments.")
    return jobs
