from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class NodePoolConfig:
    name: str = "default"
    vm_size: str = "Standard_D4_v2"
    max_pods: int = 30
    min_count: int = 1
    max_count: int = 3


@dataclass(frozen=True)
class NetworkProfileConfig:
    network_plugin: str = "azure"
    network_policy: str = "azure"
    load_balancer_sku: str = "standard"


@dataclass(frozen=True)
class ClusterConfig:
    name: str
    location: str
    node_pool: NodePoolConfig = field(default_factory=NodePoolConfig)
    network_profile: NetworkProfileConfig = field(default_factory=NetworkProfileConfig)

    @property
    def resource_group_name(self) -> str:
        return f"rg-{self.name}"


@dataclass(frozen=True)
class ChartConfig:
    name: str
    version: str
    repository: str
    values: Dict[str, Any]


@dataclass(frozen=True)
class ExternalDnsConfig:
    chart_version: str = "6.1.2"
    repository: str = "https://charts.bitnami.com/bitnami"
    # 0.10.0 doesn't work with useManagedIdentityExtension
    image_tag: str = "0.9.0"
    log_level: str = "info"
    txt_owner_id: str = "external-dns"
    sources: Tuple[str, ...] = ("ingress",)


@dataclass(frozen=True)
class DeploymentConfig:
    cluster: ClusterConfig
    charts_stack_name: str = "charts"
    external_dns: ExternalDnsConfig = field(default_factory=ExternalDnsConfig)
