"""
AKS module.

Creates a public AKS cluster with a system-assigned identity, Azure CNI
networking and a single autoscaling default node pool.
The function is pure with respect to inputs and returns the created cluster.
"""

from __future__ import annotations

from constructs import Construct

from cdktf_cdktf_provider_azurerm.kubernetes_cluster import KubernetesCluster
from cdktf_cdktf_provider_azurerm.resource_group import ResourceGroup

from iac_types import ClusterConfig


def provision_aks(
    *, scope: Construct, cfg: ClusterConfig, resource_group: ResourceGroup
) -> KubernetesCluster:
    """Provision AKS inside resource_group and return the cluster."""
    pool = cfg.node_pool
    net = cfg.network_profile

    return KubernetesCluster(
        scope,
        f"aks-{cfg.name}",
        name=cfg.name,
        location=cfg.location,
        resource_group_name=resource_group.name,
        dns_prefix=cfg.name,
        depends_on=[resource_group],
        identity={"type": "SystemAssigned"},
        role_based_access_control_enabled=True,
        azure_policy_enabled=True,
        network_profile={
            "network_plugin": net.network_plugin,
            "network_policy": net.network_policy,
            "load_balancer_sku": net.load_balancer_sku,
        },
        default_node_pool={
            "name": pool.name,
            "vm_size": pool.vm_size,
            "max_pods": pool.max_pods,
            "auto_scaling_enabled": True,
            "min_count": pool.min_count,
            "max_count": pool.max_count,
        },
    )
