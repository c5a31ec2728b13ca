from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .utils import CmdError, cdktf


def _project(args: argparse.Namespace) -> Path:
    project = Path(args.project_dir)
    if not project.exists():
        raise CmdError(f"Project directory not found: {project}")
    return project


def synth(args: argparse.Namespace) -> None:
    project = _project(args)
    print("Synthesizing CDKTF...")
    cdktf(project, ["get"])  # ensure providers
    cdktf(project, ["synth"])  # generate JSON tf
    print("Synthesis completed.")


def deploy(args: argparse.Namespace) -> None:
    project = _project(args)
    print("Deploying CDKTF...")
    cdktf(project, ["get"])
    # charts read the cluster's kubeconfig, so the cluster goes first
    cdktf(project, ["deploy", args.cluster_stack, args.charts_stack, "--auto-approve"])
    print("CDKTF deploy completed.")


def destroy(args: argparse.Namespace) -> None:
    project = _project(args)
    print("Destroying CDKTF-managed infrastructure...")
    cdktf(project, ["destroy", args.charts_stack, args.cluster_stack, "--auto-approve"])
    print("Destroy completed.")


def diff(args: argparse.Namespace) -> None:
    project = _project(args)
    cdktf(project, ["diff", args.stack])


def output(args: argparse.Namespace) -> None:
    project = _project(args)
    cdktf(project, ["output", args.cluster_stack])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m scripts.cli",
        description="Synthesize and deploy the AKS cluster and its charts with CDKTF.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--project-dir", default=".", help="Directory holding cdktf.json")
        p.add_argument("--cluster-stack", default="cluster")
        p.add_argument("--charts-stack", default="charts")

    p_synth = sub.add_parser("synth", help="Generate Terraform JSON for all stacks")
    add_common(p_synth)
    p_synth.set_defaults(func=synth)

    p_deploy = sub.add_parser("deploy", help="Deploy the cluster, then the charts")
    add_common(p_deploy)
    p_deploy.set_defaults(func=deploy)

    p_destroy = sub.add_parser("destroy", help="Destroy the charts, then the cluster")
    add_common(p_destroy)
    p_destroy.set_defaults(func=destroy)

    p_diff = sub.add_parser("diff", help="Show the plan for a single stack")
    add_common(p_diff)
    p_diff.add_argument("stack")
    p_diff.set_defaults(func=diff)

    p_output = sub.add_parser("output", help="Print the cluster stack outputs")
    add_common(p_output)
    p_output.set_defaults(func=output)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except CmdError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
