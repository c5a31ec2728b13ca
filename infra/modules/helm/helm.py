"""
Helm module.

Configures the Helm provider from an AKS kubeconfig and declares chart
releases, one namespace per chart.
"""

from __future__ import annotations

import yaml
from constructs import Construct

from cdktf import Fn
from cdktf_cdktf_provider_azurerm.kubernetes_cluster import (
    KubernetesClusterKubeConfigOutputReference,
)
from cdktf_cdktf_provider_helm.provider import HelmProvider, HelmProviderKubernetes
from cdktf_cdktf_provider_helm.release import Release

from iac_types import ChartConfig


def make_kube_config(
    config: KubernetesClusterKubeConfigOutputReference,
) -> HelmProviderKubernetes:
    """Map kubeconfig fields onto Helm provider credentials.

    Certificate and key material is base64 encoded in the AKS kubeconfig and
    is decoded by Terraform at apply time.
    """
    return HelmProviderKubernetes(
        host=config.host,
        client_certificate=Fn.base64decode(config.client_certificate),
        client_key=Fn.base64decode(config.client_key),
        cluster_ca_certificate=Fn.base64decode(config.cluster_ca_certificate),
        username=config.username,
        password=config.password,
    )


def provision_helm_provider(
    *, scope: Construct, kube_config: KubernetesClusterKubeConfigOutputReference
) -> HelmProvider:
    return HelmProvider(scope, "helm", kubernetes=make_kube_config(kube_config))


def dump_values(values: dict) -> str:
    """Serialize chart values to YAML, keeping key insertion order."""
    return yaml.safe_dump(values, sort_keys=False, default_flow_style=False)


def provision_release(*, scope: Construct, chart: ChartConfig) -> Release:
    """Declare a release of chart.name into a namespace of the same name."""
    return Release(
        scope,
        chart.name,
        name=chart.name,
        namespace=chart.name,
        repository=chart.repository,
        chart=chart.name,
        version=chart.version,
        create_namespace=True,
        values=[dump_values(chart.values)],
    )
