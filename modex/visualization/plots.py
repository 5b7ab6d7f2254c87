"""
Plotting utilities for parsed networks.

Generates:
- Opinion vs. receptivity scatter plots
- Effort bar charts against the resource budget
- Plain-text summary reports
"""

from typing import Optional
import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from ..analysis.extremism import all_selected_strategy, moderated_extremism
from ..network.model import Network


class NetworkPlotter:
    """
    Creates figures and reports for networks.

    Figures are returned to the caller; close them with
    ``matplotlib.pyplot.close`` when done.
    """

    def __init__(self, output_dir: str = "."):
        """Initialize the network plotter.

        Args:
            output_dir: Directory that relative save paths are resolved
                against. Defaults to the current directory.
        """
        self.output_dir = output_dir

    def _resolve(self, save_path: Optional[str]) -> Optional[str]:
        if save_path is None:
            return None
        if not os.path.isabs(save_path):
            save_path = os.path.join(self.output_dir, save_path)
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return save_path

    def plot_opinions(self, network: Network, save_path: Optional[str] = None):
        """Scatter each agent's opinion against its receptivity.

        Args:
            network: The network to draw.
            save_path: Optional file path to save the plot image.

        Returns:
            The matplotlib figure.
        """
        fig, ax = plt.subplots(figsize=(10, 6))

        ax.scatter(network.opinions, network.receptivities, c='tab:blue', alpha=0.7)
        ax.axvline(x=0, color='gray', linestyle='-', alpha=0.5)
        ax.set_xlabel('Opinion')
        ax.set_ylabel('Receptivity')
        ax.set_title(f'Agents (n={network.agent_count}, extremism={network.extremism:.4f})')
        ax.grid(True, alpha=0.3)

        plt.tight_layout()

        path = self._resolve(save_path)
        if path:
            plt.savefig(path, dpi=150, bbox_inches='tight')

        return fig

    def plot_effort(self, network: Network, save_path: Optional[str] = None):
        """Bar chart of the per-agent effort of the all-selected strategy.

        Args:
            network: The network to draw.
            save_path: Optional file path to save the plot image.

        Returns:
            The matplotlib figure.
        """
        fig, ax = plt.subplots(figsize=(10, 6))

        effort = list(network.effort)
        ax.bar(range(len(effort)), effort, color='tab:orange')
        ax.set_xlabel('Agent')
        ax.set_ylabel('Effort')
        ax.set_title('Moderation Effort per Agent')

        if network.effort_error:
            summary = f'Effort unavailable: {network.effort_error}'
        else:
            summary = f'Total effort: {network.total_effort:g} / resources: {network.resources}'
        ax.text(0.02, 0.95, summary, transform=ax.transAxes, va='top')
        ax.grid(True, axis='y', alpha=0.3)

        plt.tight_layout()

        path = self._resolve(save_path)
        if path:
            plt.savefig(path, dpi=150, bbox_inches='tight')

        return fig

    def create_summary_report(
        self,
        name: str,
        network: Network,
        save_path: Optional[str] = None,
    ) -> str:
        """Create a text summary report of a network.

        Args:
            name: Name the network is known by, usually its file name.
            network: The network to summarize.
            save_path: Optional file path to save the text report.

        Returns:
            The formatted report as a string.
        """
        lines = [
            "=" * 60,
            "NETWORK REPORT",
            "=" * 60,
            "",
            f"Name: {name}",
            f"Agents: {network.agent_count}",
            f"Resources: {network.resources}",
            f"Extremism: {network.extremism:.4f}",
            "",
            "EFFORT (all agents selected)",
            "-" * 40,
        ]

        if network.effort_error:
            lines.append(f"Effort Error: {network.effort_error}")
        else:
            lines.append(f"Total Effort: {network.total_effort:g}")
            lines.append(f"Remaining Resources: {network.resources - network.total_effort:g}")
            after = moderated_extremism(network, all_selected_strategy(network.agent_count))
            lines.append(f"Extremism After Moderation: {after:.4f}")

        lines.extend([
            "",
            "=" * 60,
            "END OF REPORT",
            "=" * 60,
        ])

        report = "\n".join(lines)

        path = self._resolve(save_path)
        if path:
            with open(path, 'w') as f:
                f.write(report)

        return report

    def __repr__(self) -> str:
        return f"NetworkPlotter(output_dir={self.output_dir!r})"
