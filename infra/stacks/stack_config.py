"""
Stack config helpers.

Renders the typed DeploymentConfig for diagnostics and the traceability
output emitted by the cluster stack.
"""

import json
from dataclasses import asdict
from typing import Any, Dict

from iac_types import DeploymentConfig


def synth_config_json(config: DeploymentConfig) -> Dict[str, Any]:
    """Convert dataclasses to plain dict for diagnostics or outputs."""
    return asdict(config)


def render_config_json(config: DeploymentConfig) -> str:
    """Stable JSON rendering of the config, identical across synth runs."""
    return json.dumps(synth_config_json(config), sort_keys=True)
