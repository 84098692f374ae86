"""hal_client package exports."""

from .core import (
    VALID_CONTENT_TYPES,
    BadResponseError,
    ClientSettings,
    HalClient,
    HalClientError,
    HalLink,
    HalResource,
    HttpClientError,
    InvalidArgumentError,
    ModelValidationError,
    ResourceFactory,
    create_client_from_env,
    load_env_config,
)
from .core.logging import setup_logging
from .models import LinkObject, VndError

__all__ = [
    # Client
    "HalClient",
    "ResourceFactory",
    "VALID_CONTENT_TYPES",
    # Resources
    "HalResource",
    "HalLink",
    "LinkObject",
    "VndError",
    # Exceptions
    "HalClientError",
    "InvalidArgumentError",
    "HttpClientError",
    "BadResponseError",
    "ModelValidationError",
    # Config / logging
    "ClientSettings",
    "create_client_from_env",
    "load_env_config",
    "setup_logging",
]
