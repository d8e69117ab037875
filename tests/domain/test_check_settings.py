import os

import pytest

from sitecheck.domain.check_settings import CheckSettings
from sitecheck.exceptions import ConfigurationError


def test_defaults():
    settings = CheckSettings()
    assert settings.workers == (os.cpu_count() or 1)
    assert settings.timeout_seconds == 5
    assert settings.retries == 0
    assert settings.output_path == "status.json"


@pytest.mark.parametrize("kwargs", [
    {"workers": 0},
    {"workers": "4"},
    {"timeout_seconds": 0},
    {"timeout_seconds": 2.5},
    {"retries": -1},
    {"retries": True},
    {"output_path": "  "},
])
def test_invalid_values_are_configuration_errors(kwargs):
    with pytest.raises(ConfigurationError):
        CheckSettings(**kwargs)
