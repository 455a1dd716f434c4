"""Dataverse Web API metadata client."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import requests
from azure.core.exceptions import ClientAuthenticationError

from dataverse_schema_extractor.configuration.runtime_settings import EnvironmentSettings

from .service_contracts import (
    ATTRIBUTES_FACET,
    ENTITY_FACET,
    RELATIONSHIPS_FACET,
    EnvironmentDescriptor,
    MetadataAccessError,
    MetadataServiceError,
)

logger = logging.getLogger(__name__)

_TOKEN_REFRESH_MARGIN_SECONDS = 60
_ORGANIZATION_SERVICE_ENDPOINT = "OrganizationService"
_ODATA_HEADERS = {
    "Accept": "application/json",
    "OData-MaxVersion": "4.0",
    "OData-Version": "4.0",
}


class TokenCredential(Protocol):  # pylint: disable=too-few-public-methods
    """Subset of the azure-identity credential API used by the client."""

    def get_token(self, *scopes: str, **kwargs: Any) -> Any: ...


class DataverseWebApiClient:
    """Metadata service backed by the Dataverse Web API."""

    def __init__(
        self,
        settings: EnvironmentSettings,
        credential: TokenCredential,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings
        self._credential = credential
        self._session = session or requests.Session()
        self._base_url = f"{settings.url.rstrip('/')}/api/data/v{settings.api_version}/"
        self._scope = f"{settings.url.rstrip('/')}/.default"
        self._token_lock = threading.Lock()
        self._access_token: str | None = None
        self._token_expires_on = 0.0

    def describe_environment(self) -> EnvironmentDescriptor:
        """Return the organization friendly name and its organization service endpoint."""
        payload = self._get(
            "RetrieveCurrentOrganization("
            "AccessType=Microsoft.Dynamics.CRM.EndpointAccessType'Default')",
            "Retrieve current organization",
        )
        detail = payload.get("Detail") or {}
        endpoints = _endpoint_map(detail.get("Endpoints"))
        return EnvironmentDescriptor(
            environment_url=endpoints.get(_ORGANIZATION_SERVICE_ENDPOINT) or self._settings.url,
            organization_name=str(detail.get("FriendlyName") or ""),
        )

    def retrieve_all_entities(self) -> list[Mapping[str, Any]]:
        """Retrieve entity, attribute and relationship metadata as if published."""
        filters = _entity_filters((ENTITY_FACET, ATTRIBUTES_FACET, RELATIONSHIPS_FACET))
        payload = self._get(
            f"RetrieveAllEntities(EntityFilters={filters},RetrieveAsIfPublished=true)",
            "Retrieve all entities",
        )
        return list(payload.get("EntityMetadata") or [])

    def retrieve_multiple(
        self,
        entity_set: str,
        *,
        columns: Sequence[str],
        criteria: Mapping[str, Any],
    ) -> list[Mapping[str, Any]]:
        """Query table rows matching every equality condition in ``criteria``."""
        params: dict[str, str] = {"$select": ",".join(columns)}
        if criteria:
            params["$filter"] = " and ".join(
                f"{column} eq {_odata_literal(value)}" for column, value in criteria.items()
            )
        operation = f"Query {entity_set}"
        payload = self._get(entity_set, operation, params=params)
        rows = list(payload.get("value") or [])
        next_link = payload.get("@odata.nextLink")
        while next_link:
            payload = self._get(next_link, operation)
            rows.extend(payload.get("value") or [])
            next_link = payload.get("@odata.nextLink")
        return rows

    def retrieve_entity(
        self, metadata_id: str, *, facets: Sequence[str] = (ENTITY_FACET,)
    ) -> Mapping[str, Any]:
        """Retrieve the requested facets of one entity by metadata id."""
        filters = _entity_filters(facets)
        path = (
            f"RetrieveEntity(EntityFilters={filters},LogicalName='',"
            f"MetadataId={metadata_id},RetrieveAsIfPublished=true)"
        )
        try:
            payload = self._get(path, f"Retrieve entity {metadata_id}")
        except MetadataServiceError as exc:
            raise MetadataAccessError(str(exc), status_code=exc.status_code) from exc
        metadata = payload.get("EntityMetadata")
        if not isinstance(metadata, Mapping):
            raise MetadataAccessError(f"Entity metadata {metadata_id} is missing from response.")
        return metadata

    def _get(
        self, path: str, operation: str, *, params: Mapping[str, str] | None = None
    ) -> Mapping[str, Any]:
        url = path if path.startswith("http") else self._base_url + path
        headers = {**_ODATA_HEADERS, "Authorization": f"Bearer {self._token()}"}
        logger.debug("%s: GET %s", operation, url)
        try:
            response = self._session.get(
                url,
                headers=headers,
                params=params,
                timeout=self._settings.timeout_seconds,
            )
        except requests.exceptions.Timeout as exc:
            raise MetadataServiceError(
                f"{operation} timed out after {self._settings.timeout_seconds} seconds"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise MetadataServiceError(f"{operation} failed: {exc}") from exc

        if response.status_code >= 400:
            raise MetadataServiceError(
                f"{operation} failed: {_error_message(response)} (HTTP {response.status_code})",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise MetadataServiceError(
                f"{operation} returned invalid JSON: {exc}", status_code=response.status_code
            ) from exc
        if not isinstance(payload, Mapping):
            raise MetadataServiceError(f"{operation} returned an unexpected payload.")
        return payload

    def _token(self) -> str:
        with self._token_lock:
            now = time.time()
            if self._access_token is None or now >= self._token_expires_on:
                try:
                    token = self._credential.get_token(self._scope)
                except ClientAuthenticationError as exc:
                    raise MetadataServiceError(f"Authentication failed: {exc}") from exc
                self._access_token = token.token
                self._token_expires_on = token.expires_on - _TOKEN_REFRESH_MARGIN_SECONDS
            return self._access_token


def _entity_filters(facets: Sequence[str]) -> str:
    return f"Microsoft.Dynamics.CRM.EntityFilters'{','.join(facets)}'"


def _odata_literal(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float | uuid.UUID):
        return str(value)
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"


def _endpoint_map(endpoints: Any) -> dict[str, str]:
    if not isinstance(endpoints, Mapping):
        return {}
    keys = endpoints.get("Keys") or []
    values = endpoints.get("Values") or []
    return {str(key): str(value) for key, value in zip(keys, values)}


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:500] or response.reason or "request failed"
    error = body.get("error") if isinstance(body, Mapping) else None
    if isinstance(error, Mapping) and error.get("message"):
        return str(error["message"])
    return response.reason or "request failed"
