"""
Loading of the unit's rule configuration.

The administrative screen saves SystemSettings as a JSON document; the
engine reads it once at startup and injects the resulting frozen object
into the rule services.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from staffleave.config.settings import get_settings
from staffleave.core.exceptions import ConfigurationError
from staffleave.core.logging import get_logger
from staffleave.schemas.settings import SystemSettings

logger = get_logger(__name__)


def load_system_settings(path: Optional[Union[str, Path]] = None) -> SystemSettings:
    """
    Load SystemSettings from a JSON file.

    Args:
        path: JSON document; defaults to SYSTEM_SETTINGS_FILE, and to the
            built-in defaults when neither is set

    Raises:
        ConfigurationError: the file cannot be read or does not validate
    """
    path = path or get_settings().SYSTEM_SETTINGS_FILE
    if not path:
        logger.debug("No system settings file configured, using defaults")
        return SystemSettings()

    source = str(path)
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read system settings from {source}: {e}")
        raise ConfigurationError(f"Cannot read system settings: {e}", source) from e

    try:
        loaded = SystemSettings.model_validate(raw)
    except PydanticValidationError as e:
        logger.error(f"Invalid system settings in {source}: {e}")
        raise ConfigurationError(f"Invalid system settings: {e.error_count()} error(s)", source) from e

    logger.info(f"System settings loaded from {source}")
    return loaded


def dump_system_settings(settings: SystemSettings, path: Union[str, Path]) -> None:
    """Write SystemSettings as JSON, replacing the previous document."""
    Path(path).write_text(settings.model_dump_json(indent=2), encoding="utf-8")
    logger.info(f"System settings saved to {path}")
