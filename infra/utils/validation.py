"""
Preflight validation helpers.

Pure, minimal functions to check required environment variables
and format actionable error messages for users.
"""

from __future__ import annotations

from typing import List, Mapping

# azurerm 4.x refuses to plan without a subscription
REQUIRED_ENV = ["ARM_SUBSCRIPTION_ID"]


def missing_env(env: Mapping[str, str], keys: List[str]) -> List[str]:
    """Return the list of keys missing or empty in the provided environment."""
    return [k for k in keys if not env.get(k)]


def format_missing_env_message(missing: List[str]) -> str:
    """Format a friendly, actionable message for missing env vars (bash)."""
    if not missing:
        return ""
    lines: List[str] = [
        "Preflight check failed: missing environment variables",
        "",
        "Missing:",
    ]
    lines.extend(f"  - {k}" for k in missing)
    lines.append("")
    lines.append("Set them in the current shell, e.g.:")
    lines.extend(f'  export {k}="<value>"' for k in missing)
    lines.append("")
    lines.append("Then re-run: python -m scripts.cli deploy")
    return "\n".join(lines)
