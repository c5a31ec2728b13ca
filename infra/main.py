"""
CDKTF entrypoint for the AKS cluster and its Helm charts.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from constructs import Construct
from cdktf import App, TerraformOutput, TerraformStack

from cdktf_cdktf_provider_azurerm.data_azurerm_client_config import (
    DataAzurermClientConfig,
)
from cdktf_cdktf_provider_azurerm.kubernetes_cluster import (
    KubernetesCluster,
    KubernetesClusterKubeConfigOutputReference,
)
from cdktf_cdktf_provider_azurerm.provider import AzurermProvider
from cdktf_cdktf_provider_azurerm.resource_group import ResourceGroup
from cdktf_cdktf_provider_helm.release import Release

from iac_types import ChartConfig, ClusterConfig, DeploymentConfig, ExternalDnsConfig
from modules.aks.aks import provision_aks
from modules.external_dns.external_dns import external_dns_values
from modules.helm.helm import provision_helm_provider, provision_release
from modules.resource_group.resource_group import provision_resource_group
from stacks.stack_config import render_config_json
from utils.config_loader import load_tfvars_config
from utils.validation import REQUIRED_ENV, format_missing_env_message, missing_env


class ClusterStack(TerraformStack):
    """TerraformStack holding the resource group and the AKS cluster."""

    resource_group: ResourceGroup
    aks: KubernetesCluster

    def __init__(self, scope: Construct, id: str, config: ClusterConfig) -> None:
        super().__init__(scope, id)
        self.config = config

        AzurermProvider(self, "azure", features=[{}])

        self.resource_group = provision_resource_group(scope=self, cfg=config)
        self.aks = provision_aks(
            scope=self, cfg=config, resource_group=self.resource_group
        )

        TerraformOutput(self, "resource_group_name", value=self.resource_group.name)
        TerraformOutput(self, "cluster_name", value=self.aks.name)
        TerraformOutput(
            self, "kube_config", value=self.aks.kube_config_raw, sensitive=True
        )

    @property
    def kube_config(self) -> KubernetesClusterKubeConfigOutputReference:
        return self.aks.kube_config.get(0)


class ChartsStack(TerraformStack):
    """TerraformStack installing Helm charts onto a ClusterStack's cluster."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        cluster: ClusterStack,
        external_dns: Optional[ExternalDnsConfig] = None,
    ) -> None:
        super().__init__(scope, id)
        self.cluster = cluster
        self.releases: Dict[str, Release] = {}

        # Deferred cluster values; CDKTF wires them through remote state.
        provision_helm_provider(scope=self, kube_config=cluster.kube_config)
        AzurermProvider(self, "azure", features=[{}])

        self.add_external_dns(external_dns or ExternalDnsConfig())

    def add_chart(
        self,
        name: str,
        version: str,
        repository: str,
        values: Optional[Dict[str, Any]] = None,
    ) -> Release:
        chart = ChartConfig(
            name=name, version=version, repository=repository, values=values or {}
        )
        release = provision_release(scope=self, chart=chart)
        self.releases[name] = release
        return release

    def add_external_dns(self, config: ExternalDnsConfig) -> "ChartsStack":
        client = DataAzurermClientConfig(self, "client")
        self.add_chart(
            "external-dns",
            config.chart_version,
            config.repository,
            external_dns_values(
                cfg=config,
                resource_group_name=self.cluster.resource_group.name,
                client=client,
                kubelet_client_id=self.cluster.aks.kubelet_identity.client_id,
            ),
        )
        return self


def build_stacks(app: App, config: DeploymentConfig) -> Tuple[ClusterStack, ChartsStack]:
    cluster = ClusterStack(app, config.cluster.name, config.cluster)
    charts = ChartsStack(
        app,
        config.charts_stack_name,
        cluster=cluster,
        external_dns=config.external_dns,
    )
    # Surface a copy of the config used for traceability
    TerraformOutput(cluster, "config_json", value=render_config_json(config))
    return cluster, charts


def main() -> None:
    repo_root = Path(__file__).resolve().parents[1]

    # Preflight: ensure required env vars are present before synthesizing
    missing = missing_env(env=os.environ, keys=REQUIRED_ENV)
    if missing:
        print(format_missing_env_message(missing), file=sys.stderr)
        sys.exit(2)

    try:
        cfg = load_tfvars_config(repo_root=repo_root)
    except (FileNotFoundError, KeyError, ValueError) as ex:
        print(f"Config error: {ex}", file=sys.stderr)
        sys.exit(1)

    app = App()
    try:
        build_stacks(app, cfg)
    except ValueError as ex:
        # Surface a concise, friendly message instead of a long traceback
        print(f"Error: {ex}", file=sys.stderr)
        sys.exit(1)

    try:
        app.synth()
    except Exception as ex:  # noqa: BLE001 - present actionable error
        print("Synthesis failed.", file=sys.stderr)
        print(str(ex), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
