"""Diagnostic CLI over node ownership and pod state projection."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from kube_bridge.exceptions import KubeBridgeError
from kube_bridge.logging_config import get_logger, setup_logging

app = typer.Typer(
    name="kube-bridge",
    help="Inspect which scheduler owns each node and what state pods report",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: str | None = typer.Option(None, "--log-file", help="Path to log file"),
    trace_decisions: bool = typer.Option(
        False,
        "--trace-decisions",
        help="Log why each node is or is not owned by the legacy scheduler",
    ),
):
    """Global options for all commands."""
    log_path = Path(log_file) if log_file else None
    setup_logging(verbose=verbose, log_file=log_path, trace_decisions=trace_decisions)
    logger.debug("Logging initialized")


def _fail(e: KubeBridgeError) -> None:
    logger.error(f"{type(e).__name__}: {e.message}")
    console.print(f"[red]Error:[/red] {e.message}")
    if e.details:
        console.print(f"\n{e.details}")
    raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version information."""
    from kube_bridge import __version__

    typer.echo(f"kube-bridge version {__version__}")


@app.command()
def nodes(
    config_path: str | None = typer.Option(
        None, "--config", "-c", help="Path to YAML configuration (farzones, tolerated taint keys)"
    ),
    snapshot: str | None = typer.Option(
        None, "--snapshot", "-s", help="Read nodes from a manifest file instead of the cluster"
    ),
) -> None:
    """
    Show which scheduler owns each node.

    A node is listed as 'legacy' when the legacy scheduler may place work on it,
    and as 'modern' otherwise.

    Examples:
        # Nodes of the current kubeconfig context with default configuration
        kube-bridge nodes

        # Nodes exported with kubectl, with farzones from a config file
        kube-bridge nodes --config bridge.yaml --snapshot nodes.yaml
    """
    from kube_bridge.config import BridgeConfig
    from kube_bridge.farzone import is_farzone_node
    from kube_bridge.ownership import is_node_owned_by_legacy_scheduler
    from kube_bridge.snapshot import fetch_nodes, load_nodes

    try:
        config = BridgeConfig.load(config_path) if config_path else BridgeConfig()
        node_list = load_nodes(snapshot) if snapshot else fetch_nodes()
    except KubeBridgeError as e:
        _fail(e)

    if not node_list:
        console.print("[yellow]No nodes found[/yellow]")
        return

    table = Table(title="Node Ownership")
    table.add_column("Name", style="cyan")
    table.add_column("Zone", style="magenta")
    table.add_column("Farzone")
    table.add_column("Owner", style="green")
    table.add_column("Taints", style="yellow")

    legacy_count = 0
    for node in sorted(node_list, key=lambda n: n.name):
        owned = is_node_owned_by_legacy_scheduler(
            config.farzones, config.tolerated_taint_keys, node
        )
        if owned:
            legacy_count += 1
        table.add_row(
            node.name,
            node.zone or "N/A",
            "Yes" if is_farzone_node(config.farzones, node) else "No",
            "legacy" if owned else "modern",
            ", ".join(str(t) for t in node.taints) or "-",
        )

    console.print(table)
    console.print(f"\n[bold]Total nodes:[/bold] {len(node_list)}")
    console.print(f"[bold]Legacy scheduler:[/bold] {legacy_count}")
    console.print(f"[bold]Modern scheduler:[/bold] {len(node_list) - legacy_count}")


@app.command()
def pods(
    snapshot: str | None = typer.Option(
        None, "--snapshot", "-s", help="Read pods from a manifest file instead of the cluster"
    ),
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help="Only show pods of this namespace"
    ),
) -> None:
    """
    Show the scheduler, container state and executor IP of each pod.
    """
    from kube_bridge.ownership import is_owned_by_modern_scheduler
    from kube_bridge.pod_state import (
        find_container_state,
        format_state,
        get_executor_network_details,
    )
    from kube_bridge.snapshot import fetch_pods, load_pods

    try:
        pod_list = load_pods(snapshot) if snapshot else fetch_pods(namespace)
    except KubeBridgeError as e:
        _fail(e)

    if namespace:
        pod_list = [p for p in pod_list if p.namespace == namespace]

    if not pod_list:
        console.print("[yellow]No pods found[/yellow]")
        return

    table = Table(title="Pod State")
    table.add_column("Namespace", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Scheduler", style="green")
    table.add_column("State")
    table.add_column("Executor IP", style="yellow")

    for pod in sorted(pod_list, key=lambda p: (p.namespace, p.name)):
        state = find_container_state(pod)
        network = get_executor_network_details(pod)
        table.add_row(
            pod.namespace,
            pod.name,
            "modern" if is_owned_by_modern_scheduler(pod) else "legacy",
            Text(format_state(state)) if state is not None else "-",
            network.ip_address if network else "N/A",
        )

    console.print(table)
    console.print(f"\n[bold]Total pods:[/bold] {len(pod_list)}")


if __name__ == "__main__":
    app()
