"""Remote metadata service exports."""

from .credentials import build_credential
from .service_contracts import (
    ATTRIBUTES_FACET,
    ENTITY_FACET,
    RELATIONSHIPS_FACET,
    EnvironmentDescriptor,
    MetadataAccessError,
    MetadataService,
    MetadataServiceError,
)
from .web_api_client import DataverseWebApiClient, TokenCredential

__all__ = [
    "ATTRIBUTES_FACET",
    "ENTITY_FACET",
    "RELATIONSHIPS_FACET",
    "DataverseWebApiClient",
    "EnvironmentDescriptor",
    "MetadataAccessError",
    "MetadataService",
    "MetadataServiceError",
    "TokenCredential",
    "build_credential",
]
