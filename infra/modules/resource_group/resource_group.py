"""
Resource group module.

Creates the resource group that holds the AKS cluster.
"""

from __future__ import annotations

from constructs import Construct

from cdktf_cdktf_provider_azurerm.resource_group import ResourceGroup

from iac_types import ClusterConfig


def provision_resource_group(*, scope: Construct, cfg: ClusterConfig) -> ResourceGroup:
    """Provision the cluster's resource group, named rg-<cluster name>."""
    return ResourceGroup(
        scope,
        cfg.resource_group_name,
        name=cfg.resource_group_name,
        location=cfg.location,
    )
