"""Log categories for structured logging and filtering."""

from enum import Enum


class LogCategory(str, Enum):
    """Log categories attached to every event as ``category``."""

    LIFECYCLE = "lifecycle"  # Client creation and shutdown
    HTTP = "http"  # Requests, responses and body accumulation
    PROTOCOL = "protocol"  # Schema decoding notices
    CONFIG = "config"  # Configuration loading and validation
    DEFAULT = "general"  # Uncategorized logs


LIFECYCLE = LogCategory.LIFECYCLE.value
HTTP = LogCategory.HTTP.value
PROTOCOL = LogCategory.PROTOCOL.value
CONFIG = LogCategory.CONFIG.value
DEFAULT = LogCategory.DEFAULT.value
