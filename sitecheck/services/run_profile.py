from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

import yaml

from sitecheck.exceptions import ConfigurationError


KNOWN_KEYS = {"urls", "file", "workers", "timeout", "retries", "output"}


@dataclass(frozen=True)
class RunProfile:
    """Options read from a YAML run profile; unset fields are None."""

    urls: list[str] = field(default_factory=list)
    file: Optional[str] = None
    workers: Optional[int] = None
    timeout: Optional[int] = None
    retries: Optional[int] = None
    output: Optional[str] = None


class RunProfileParser:
    """Parse a YAML dict into a RunProfile.

    Responsibility: schema/validation only. A relative ``file`` entry is
    resolved against the profile's own directory.
    """

    def parse(self, *, profile_path: str, data) -> RunProfile:
        if data is None:
            return RunProfile()
        if not isinstance(data, dict):
            raise ConfigurationError("run profile must be a mapping", source=profile_path)

        unknown = sorted(set(data) - KNOWN_KEYS)
        if unknown:
            raise ConfigurationError(f"unknown keys: {', '.join(unknown)}", source=profile_path)

        urls = data.get("urls") or []
        if isinstance(urls, str) or not isinstance(urls, list):
            raise ConfigurationError("'urls' must be a list", source=profile_path)

        file = data.get("file")
        if file is not None:
            file = str(file)
            if not os.path.isabs(file):
                file = os.path.join(os.path.dirname(os.path.abspath(profile_path)), file)

        output = data.get("output")
        return RunProfile(
            urls=[str(u) for u in urls],
            file=file,
            workers=data.get("workers"),
            timeout=data.get("timeout"),
            retries=data.get("retries"),
            output=str(output) if output is not None else None,
        )


def load_run_profile(path, parser: Optional[RunProfileParser] = None) -> RunProfile:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"cannot read run profile: {e}", source=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML in run profile: {e}", source=str(path)) from e
    return (parser or RunProfileParser()).parse(profile_path=str(path), data=data)
