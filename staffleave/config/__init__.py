"""
Configuration package: process settings.

The unit's rule configuration is loaded through
staffleave.config.system_settings, which depends on the logging setup and
is therefore not imported here.
"""

from staffleave.config.settings import LoggingSettings, Settings, get_settings, settings

__all__ = [
    "LoggingSettings",
    "Settings",
    "get_settings",
    "settings",
]
