"""Credential selection for the Dataverse Web API."""

from __future__ import annotations

from azure.identity import (
    ClientSecretCredential,
    DefaultAzureCredential,
    InteractiveBrowserCredential,
)

from dataverse_schema_extractor.configuration.runtime_settings import AuthSettings

from .web_api_client import TokenCredential


def build_credential(auth: AuthSettings) -> TokenCredential:
    """Pick a client-secret, interactive or default Azure credential."""
    if auth.tenant_id and auth.client_id and auth.client_secret:
        return ClientSecretCredential(
            tenant_id=auth.tenant_id,
            client_id=auth.client_id,
            client_secret=auth.client_secret,
        )
    if auth.interactive:
        kwargs = {}
        if auth.tenant_id:
            kwargs["tenant_id"] = auth.tenant_id
        if auth.client_id:
            kwargs["client_id"] = auth.client_id
        return InteractiveBrowserCredential(**kwargs)
    return DefaultAzureCredential()
