import pytest

from iac_types import ClusterConfig, DeploymentConfig
from synth_helpers import synth_stacks


@pytest.fixture
def deployment_config() -> DeploymentConfig:
    return DeploymentConfig(cluster=ClusterConfig(name="cluster", location="eastus"))


@pytest.fixture
def synthesized(tmp_path) -> tuple[dict, dict]:
    return synth_stacks(tmp_path / "cdktf.out")


@pytest.fixture
def arm_env(monkeypatch):
    monkeypatch.setenv("ARM_SUBSCRIPTION_ID", "00000000-0000-0000-0000-000000000000")
