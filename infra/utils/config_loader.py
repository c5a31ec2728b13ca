"""
Config loader for tfvars -> typed config used by the CDKTF stacks.

Functional, pure helpers that parse a minimal subset of .tfvars syntax
for the variables used by this repo. No external dependencies.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from iac_types import ClusterConfig, DeploymentConfig

DEFAULT_TFVARS_FILE = "vars/dev.tfvars"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_tfvars(content: str) -> Dict[str, str]:
    """Very small tfvars parser for simple key = value pairs.

    Only single-line scalars are supported. Lines starting with '#' are ignored.
    """
    vars_map: Dict[str, str] = {}
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, val = line.split("=", 1)
        val = val.strip()
        if " #" in val:
            val = val.split(" #", 1)[0].strip()
        vars_map[key.strip()] = val
    return vars_map


def _required(vars_map: Dict[str, str], key: str) -> str:
    if key not in vars_map:
        raise KeyError(f"Missing required var: {key}")
    value = _strip_quotes(vars_map[key])
    if not value:
        raise ValueError(f"Empty value for required var: {key}")
    return value


def _optional(vars_map: Dict[str, str], key: str, default: str) -> str:
    if key not in vars_map:
        return default
    return _strip_quotes(vars_map[key]) or default


def build_deployment_config(vars_map: Dict[str, str]) -> DeploymentConfig:
    cluster = ClusterConfig(
        name=_required(vars_map, "cluster_name"),
        location=_required(vars_map, "location"),
    )
    return DeploymentConfig(
        cluster=cluster,
        charts_stack_name=_optional(vars_map, "charts_stack_name", "charts"),
    )


def resolve_tfvars_path(
    *, repo_root: Path, env: Optional[Mapping[str, str]] = None
) -> Path:
    env = os.environ if env is None else env
    # Use default if env var is missing or empty
    tfvars_file = (env.get("TFVARS_FILE") or "").strip() or DEFAULT_TFVARS_FILE
    return (repo_root / tfvars_file).resolve()


def load_tfvars_config(
    *, repo_root: Path, env: Optional[Mapping[str, str]] = None
) -> DeploymentConfig:
    vars_path = resolve_tfvars_path(repo_root=repo_root, env=env)
    if not vars_path.exists():
        raise FileNotFoundError(f"tfvars file not found: {vars_path}")

    content = vars_path.read_text(encoding="utf-8")
    return build_deployment_config(_parse_tfvars(content))
