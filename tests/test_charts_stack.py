"""Tests for the Helm provider wiring and the external-dns release."""

import json

import yaml
from cdktf import Testing, TerraformStack
from cdktf_cdktf_provider_azurerm.data_azurerm_client_config import (
    DataAzurermClientConfig,
)
from cdktf_cdktf_provider_helm.release import Release

from iac_types import ClusterConfig, ExternalDnsConfig
from main import ChartsStack, ClusterStack
from modules.aks.aks import provision_aks
from modules.helm.helm import dump_values, provision_helm_provider
from modules.resource_group.resource_group import provision_resource_group
from synth_helpers import first_block, only_resource, release_named


def _external_dns(charts_json: dict) -> dict:
    return release_named(charts_json, "external-dns")


def test_helm_provider_reads_kube_config_of_same_cluster():
    stack = TerraformStack(Testing.app(), "single")
    cfg = ClusterConfig(name="cluster", location="eastus")
    rg = provision_resource_group(scope=stack, cfg=cfg)
    aks = provision_aks(scope=stack, cfg=cfg, resource_group=rg)
    provision_helm_provider(scope=stack, kube_config=aks.kube_config.get(0))

    synthesized = json.loads(Testing.synth(stack))
    kubernetes = first_block(first_block(synthesized["provider"]["helm"])["kubernetes"])

    for field in ("host", "username", "password"):
        assert kubernetes[field].startswith("${azurerm_kubernetes_cluster.")
        assert f"kube_config[0].{field}" in kubernetes[field]
        assert "base64decode" not in kubernetes[field]
    for field in ("client_certificate", "client_key", "cluster_ca_certificate"):
        assert kubernetes[field].startswith("${base64decode(azurerm_kubernetes_cluster.")
        assert f"kube_config[0].{field}" in kubernetes[field]


def test_charts_stack_reads_cluster_through_remote_state(synthesized):
    cluster_json, charts_json = synthesized
    kubernetes = first_block(first_block(charts_json["provider"]["helm"])["kubernetes"])

    assert "terraform_remote_state" in charts_json["data"]
    assert "terraform_remote_state" in kubernetes["host"]
    assert kubernetes["client_key"].startswith("${base64decode(")
    assert "terraform_remote_state" in kubernetes["client_key"]
    assert any(k.startswith("cross-stack-output") for k in cluster_json["output"])


def test_charts_stack_declares_azure_provider_and_client_config(synthesized):
    _, charts_json = synthesized

    assert "azurerm" in charts_json["provider"]
    assert len(charts_json["data"][DataAzurermClientConfig.TF_RESOURCE_TYPE]) == 1


def test_external_dns_release_is_namespaced_by_name(synthesized):
    _, charts_json = synthesized
    release = _external_dns(charts_json)

    assert release["name"] == "external-dns"
    assert release["namespace"] == "external-dns"
    assert release["chart"] == "external-dns"
    assert release["create_namespace"] is True
    assert release["version"] == "6.1.2"
    assert release["repository"] == "https://charts.bitnami.com/bitnami"
    assert len(release["values"]) == 1


def test_external_dns_values(synthesized):
    _, charts_json = synthesized
    values = yaml.safe_load(_external_dns(charts_json)["values"][0])

    assert values["provider"] == "azure"
    assert values["image"] == {"tag": "0.9.0"}
    assert values["logLevel"] == "info"
    assert values["txtOwnerId"] == "external-dns"
    assert values["sources"] == ["ingress"]

    azure = values["azure"]
    assert azure["useManagedIdentityExtension"] is True
    assert "tenant_id" in azure["tenantId"]
    assert "subscription_id" in azure["subscriptionId"]
    assert "terraform_remote_state" in azure["resourceGroup"]
    assert "terraform_remote_state" in azure["userAssignedIdentityID"]


def test_external_dns_values_keep_declaration_order(synthesized):
    _, charts_json = synthesized
    lines = _external_dns(charts_json)["values"][0].splitlines()

    assert lines[0] == "provider: azure"
    top_level = [line.split(":")[0] for line in lines if not line.startswith((" ", "-"))]
    assert top_level == ["provider", "image", "azure", "logLevel", "txtOwnerId", "sources"]


def test_add_chart_creates_namespace_per_chart():
    app = Testing.app()
    cluster = ClusterStack(app, "cluster", ClusterConfig(name="cluster", location="eastus"))
    charts = ChartsStack(app, "charts", cluster=cluster)

    release = charts.add_chart(
        "ingress-nginx",
        "4.0.6",
        "https://kubernetes.github.io/ingress-nginx",
        {"controller": {"replicaCount": 2}},
    )
    synthesized = Testing.synth(charts)

    assert isinstance(release, Release)
    assert set(charts.releases) == {"external-dns", "ingress-nginx"}
    assert Testing.to_have_resource_with_properties(
        synthesized,
        Release.TF_RESOURCE_TYPE,
        {
            "name": "ingress-nginx",
            "namespace": "ingress-nginx",
            "chart": "ingress-nginx",
            "create_namespace": True,
        },
    )
    nginx = release_named(json.loads(synthesized), "ingress-nginx")
    assert yaml.safe_load(nginx["values"][0]) == {"controller": {"replicaCount": 2}}


def test_add_chart_without_values_dumps_empty_mapping():
    app = Testing.app()
    cluster = ClusterStack(app, "cluster", ClusterConfig(name="cluster", location="eastus"))
    charts = ChartsStack(app, "charts", cluster=cluster)
    charts.add_chart("metrics-server", "3.8.2", "https://kubernetes-sigs.github.io/metrics-server/")

    release = release_named(json.loads(Testing.synth(charts)), "metrics-server")

    assert yaml.safe_load(release["values"][0]) == {}


def test_external_dns_config_overrides_flow_into_values():
    app = Testing.app()
    cluster = ClusterStack(app, "cluster", ClusterConfig(name="cluster", location="eastus"))
    charts = ChartsStack(
        app,
        "charts",
        cluster=cluster,
        external_dns=ExternalDnsConfig(log_level="debug", sources=("ingress", "service")),
    )

    release = release_named(json.loads(Testing.synth(charts)), "external-dns")
    values = yaml.safe_load(release["values"][0])

    assert values["logLevel"] == "debug"
    assert values["sources"] == ["ingress", "service"]


def test_dump_values_is_block_yaml_in_insertion_order():
    dumped = dump_values({"b": 1, "a": {"nested": [True]}})

    assert dumped == "b: 1\na:\n  nested:\n  - true\n"


def test_cluster_resource_is_not_duplicated_into_charts(synthesized):
    cluster_json, charts_json = synthesized

    assert only_resource(cluster_json, "azurerm_kubernetes_cluster")["name"] == "cluster"
    assert "azurerm_kubernetes_cluster" not in charts_json.get("resource", {})
