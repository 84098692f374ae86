"""Core HAL navigation: resources, links, response classification, client."""

from .client import HalClient
from .config import ClientSettings, create_client_from_env, load_env_config
from .errors import (
    BadResponseError,
    HalClientError,
    HttpClientError,
    InvalidArgumentError,
    ModelValidationError,
)
from .factory import VALID_CONTENT_TYPES, ResourceFactory
from .hal import normalize_entries, resolve_link_rel, split_document
from .link import HalLink, expand_uri_template
from .resource import HalResource

__all__ = [
    # Client
    "HalClient",
    "ResourceFactory",
    "VALID_CONTENT_TYPES",
    # Resources
    "HalResource",
    "HalLink",
    "expand_uri_template",
    # HAL utilities
    "normalize_entries",
    "resolve_link_rel",
    "split_document",
    # Exceptions
    "HalClientError",
    "InvalidArgumentError",
    "HttpClientError",
    "BadResponseError",
    "ModelValidationError",
    # Config helpers
    "ClientSettings",
    "create_client_from_env",
    "load_env_config",
]
