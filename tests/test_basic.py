"""Basic smoke tests for flowlint."""

from flowlint import __version__
from flowlint.config import settings


def test_version():
    """Test version is defined."""
    assert __version__ == "0.1.0"


def test_settings_load():
    """Test settings can be loaded."""
    assert settings.log_format in ["json", "console"]
    assert settings.typo_min_length == 2
    assert settings.typo_max_distance == 2
    assert settings.typo_max_length_delta == 2
    assert settings.frame_interval_seconds > 0
