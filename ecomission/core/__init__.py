"""Core module - config, storage, exceptions."""

from ecomission.core.config import get_settings, Settings
from ecomission.core.exceptions import (
    AppException,
    NotFoundException,
    BadRequestException,
    UpstreamException,
)

__all__ = [
    "get_settings",
    "Settings",
    "AppException",
    "NotFoundException",
    "BadRequestException",
    "UpstreamException",
]
