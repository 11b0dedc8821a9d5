"""
Console Display Adapter

Formats simulation reports for the terminal.
"""

from typing import List, Optional

from netcollapse.application.services.simulation_service import SimulationReport
from netcollapse.domain.models import TopologyDescription


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


STATE_COLORS = {
    "running": Colors.YELLOW,
    "converged": Colors.GREEN,
    "halted_disconnected": Colors.RED,
}


class ConsoleDisplay:
    """Terminal rendering of topologies and simulation reports."""
    Colors = Colors

    @staticmethod
    def colored(text: str, color: str, bold: bool = False) -> str:
        """Apply color to text."""
        style = Colors.BOLD if bold else ""
        return f"{style}{color}{text}{Colors.RESET}"

    def print_header(self, title: str, char: str = "=", width: int = 78) -> None:
        """Print a formatted header."""
        print(f"\n{self.colored(char * width, Colors.CYAN)}")
        print(f"{self.colored(f' {title} '.center(width), Colors.CYAN, bold=True)}")
        print(f"{self.colored(char * width, Colors.CYAN)}")

    def print_subheader(self, title: str, char: str = "-", width: int = 78) -> None:
        """Print a formatted subheader."""
        print(f"\n{self.colored(f' {title} ', Colors.WHITE, bold=True)}")
        print(f"{self.colored(char * width, Colors.GRAY)}")

    @staticmethod
    def _nodes(nodes: List[int], limit: int = 16) -> str:
        if not nodes:
            return "-"
        shown = ", ".join(str(n) for n in nodes[:limit])
        return shown if len(nodes) <= limit else f"{shown}, ... (+{len(nodes) - limit})"

    # --- Topology Display ---

    def display_topology(self, topology: TopologyDescription, title: Optional[str] = None) -> None:
        self.print_subheader(title or "Topology")
        print(f"  {'Nodes:':<20} {topology.node_count()}")
        print(f"  {'Edges:':<20} {topology.edge_count()}")

    # --- Simulation Display ---

    def display_report(self, report: SimulationReport, top: int = 5) -> None:
        """Display the outcome of a collapse simulation."""
        self.print_header("Cascading Collapse Simulation")

        state_color = STATE_COLORS.get(report.state, Colors.WHITE)
        print(f"  {'State:':<20} {self.colored(report.state.upper(), state_color, bold=True)}")
        print(f"  {'Alpha:':<20} {report.alpha:g}")
        print(f"  {'Nodes:':<20} {report.node_count}")
        print(f"  {'Rounds:':<20} {report.rounds}")
        print(f"  {'Iterations:':<20} {len(report.iterations)}")
        print(f"  {'Final alive:':<20} {self._nodes(report.final_alive)}")

        self.display_iterations(report)
        if report.iterations:
            self.display_top_loaded(report, top=top)

    def display_iterations(self, report: SimulationReport) -> None:
        self.print_subheader("Iterations")
        print(f"  {'#':>3}  {'Alive':>5}  {'Removed':<24} {'Max B':>6}  {'Zmax':>8}  {'Beta':>8}  {'|B-1|':>8}")
        for it in report.iterations:
            max_b = "-" if it.max_betweenness is None else str(it.max_betweenness)
            delta_color = Colors.GREEN if it.beta_delta < 0.5 else Colors.YELLOW
            print(
                f"  {it.index:>3}  {it.alive_count:>5}  {self._nodes(it.removed, 6):<24} {max_b:>6}  "
                f"{it.zmax:>8.4f}  {it.beta:>8.4f}  {self.colored(f'{it.beta_delta:>8.4f}', delta_color)}"
            )

        if report.ks:
            print(f"\n  {'k per round:':<20} {', '.join(f'{k:.3f}' for k in report.ks)}")
        if report.beta_deltas:
            print(f"  {'|beta-1| per round:':<20} {', '.join(f'{b:.3f}' for b in report.beta_deltas)}")

    def display_top_loaded(self, report: SimulationReport, top: int = 5) -> None:
        """Most loaded nodes of the initial network."""
        first = report.iterations[0]
        ranked = sorted(first.betweenness.items(), key=lambda kv: (-kv[1], kv[0]))[:top]
        if not ranked or all(v == 0 for _, v in ranked):
            return

        self.print_subheader(f"Top {len(ranked)} Loaded Nodes (iteration 0)")
        print(f"  {'Node':>6}  {'Betweenness':>12}  {'Capacity':>12}")
        for node, value in ranked:
            print(f"  {node:>6}  {value:>12g}  {first.capacity.get(node, 0.0):>12g}")
