import pytest
from pydantic import ValidationError

from staffleave.config.settings import LoggingSettings, Settings


def test_environment_must_be_known():
    with pytest.raises(ValidationError):
        Settings(ENVIRONMENT="qa")


def test_log_level_is_normalized():
    assert LoggingSettings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


def test_log_format_is_json_or_text():
    with pytest.raises(ValidationError):
        LoggingSettings(LOG_FORMAT="xml")
