"""
Shared Test Fixtures for VerStamp

- config.py: WASimCommander release configuration, version and generator fixtures
"""

from .config import (
    WASIM_BUILD_DATE,
    WASIM_IDENTITY,
    quiet_logger,
    wasim_config,
    wasim_config_dict,
    wasim_generator,
    wasim_version,
)

__all__ = [
    "WASIM_BUILD_DATE",
    "WASIM_IDENTITY",
    "quiet_logger",
    "wasim_config",
    "wasim_config_dict",
    "wasim_generator",
    "wasim_version",
]
