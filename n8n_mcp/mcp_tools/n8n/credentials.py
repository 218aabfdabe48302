"""n8n credential management tools.

Credential secrets never leave this server: read tools reduce every
credential to its identity fields, and write tools echo back only the
ID and name.
"""

from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field

from ...logging_config import get_logger
from ...tool_registry import ToolInput, tool
from .client import N8nClient

logger = get_logger(__name__)

# Fields that may be returned for a credential; everything else is dropped.
CREDENTIAL_PUBLIC_FIELDS = ("id", "name", "type", "createdAt", "updatedAt")


def sanitize_credential(credential: Any) -> Dict[str, Any]:
    """Reduce a credential record to its public identity fields.

    Args:
        credential: Raw credential object from the n8n API

    Returns:
        Dict holding only the allow-listed fields present in the input
    """
    if not isinstance(credential, dict):
        return {}
    return {
        key: credential[key]
        for key in CREDENTIAL_PUBLIC_FIELDS
        if key in credential
    }


def _identity(response: Any) -> Dict[str, Any]:
    response = response if isinstance(response, dict) else {}
    return {"id": response.get("id"), "name": response.get("name")}


# =============================================================================
# List / Get Credential Tools
# =============================================================================

class N8nListCredentialsInput(ToolInput):
    """Input schema for n8n_list_credentials."""

    type: Optional[str] = Field(default=None, description="Filter by credential type")


@tool(
    name="n8n_list_credentials",
    description="List all credentials (without sensitive data)",
    input_schema=N8nListCredentialsInput,
    tags=["n8n", "credentials"],
)
async def n8n_list_credentials(params: N8nListCredentialsInput, client: N8nClient) -> Dict[str, Any]:
    """List credentials with their secret payloads removed."""
    query = {"type": params.type} if params.type else None

    logger.info(f"Listing n8n credentials (type={params.type})")
    response = await client.get("/credentials", params=query)

    records = response.get("data") if isinstance(response, dict) else None
    return {"data": [sanitize_credential(cred) for cred in records or []]}


class N8nGetCredentialInput(ToolInput):
    """Input schema for n8n_get_credential."""

    credential_id: str = Field(description="Credential ID")


@tool(
    name="n8n_get_credential",
    description="Get credential details (without sensitive data)",
    input_schema=N8nGetCredentialInput,
    tags=["n8n", "credentials"],
)
async def n8n_get_credential(params: N8nGetCredentialInput, client: N8nClient) -> Dict[str, Any]:
    logger.info(f"Getting n8n credential: {params.credential_id}")
    response = await client.get(f"/credentials/{params.credential_id}")
    return sanitize_credential(response)


# =============================================================================
# Create / Update / Delete Credential Tools
# =============================================================================

class N8nCreateCredentialInput(ToolInput):
    """Input schema for n8n_create_credential."""

    name: str = Field(description="Credential name")
    type: str = Field(description="Credential type (e.g., httpBasicAuth)")
    data: Dict[str, Any] = Field(description="Credential data")


@tool(
    name="n8n_create_credential",
    description="Create a new credential",
    input_schema=N8nCreateCredentialInput,
    tags=["n8n", "credentials"],
)
async def n8n_create_credential(params: N8nCreateCredentialInput, client: N8nClient) -> Dict[str, Any]:
    logger.info(f"Creating n8n credential: {params.name} ({params.type})")
    response = await client.post(
        "/credentials",
        json={"name": params.name, "type": params.type, "data": params.data},
    )
    return _identity(response)


class N8nUpdateCredentialInput(ToolInput):
    """Input schema for n8n_update_credential.

    Unknown fields are kept and forwarded to n8n unchanged.
    """

    model_config = ConfigDict(extra="allow")

    credential_id: str = Field(description="Credential ID")
    name: Optional[str] = Field(default=None, description="New credential name")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Updated credential data")


@tool(
    name="n8n_update_credential",
    description="Update an existing credential",
    input_schema=N8nUpdateCredentialInput,
    tags=["n8n", "credentials"],
)
async def n8n_update_credential(params: N8nUpdateCredentialInput, client: N8nClient) -> Dict[str, Any]:
    update = params.model_dump(exclude={"credential_id"}, exclude_unset=True)

    logger.info(f"Updating n8n credential {params.credential_id}: {sorted(update)}")
    response = await client.patch(f"/credentials/{params.credential_id}", json=update)
    return _identity(response)


class N8nDeleteCredentialInput(ToolInput):
    """Input schema for n8n_delete_credential."""

    credential_id: str = Field(description="Credential ID to delete")


@tool(
    name="n8n_delete_credential",
    description="Delete a credential",
    input_schema=N8nDeleteCredentialInput,
    tags=["n8n", "credentials"],
)
async def n8n_delete_credential(params: N8nDeleteCredentialInput, client: N8nClient) -> str:
    logger.info(f"Deleting n8n credential: {params.credential_id}")
    await client.delete(f"/credentials/{params.credential_id}")
    return f"Credential {params.credential_id} deleted"
