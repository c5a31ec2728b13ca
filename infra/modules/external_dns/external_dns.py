"""
external-dns module.

Builds the chart values for external-dns running against Azure DNS with the
cluster's kubelet managed identity.
"""

from __future__ import annotations

from typing import Any, Dict

from cdktf_cdktf_provider_azurerm.data_azurerm_client_config import (
    DataAzurermClientConfig,
)

from iac_types import ExternalDnsConfig


def external_dns_values(
    *,
    cfg: ExternalDnsConfig,
    resource_group_name: str,
    client: DataAzurermClientConfig,
    kubelet_client_id: str,
) -> Dict[str, Any]:
    """Return the values block for the external-dns chart."""
    return {
        "provider": "azure",
        "image": {
            "tag": cfg.image_tag,
        },
        "azure": {
            "resourceGroup": resource_group_name,
            "tenantId": client.tenant_id,
            "subscriptionId": client.subscription_id,
            "useManagedIdentityExtension": True,
            "userAssignedIdentityID": kubelet_client_id,
        },
        "logLevel": cfg.log_level,
        "txtOwnerId": cfg.txt_owner_id,
        "sources": list(cfg.sources),
    }
