"""
Terminal Renderer for Component Configurations.

Provides rich terminal output to inspect the configuration of each component.
"""

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from clusterconf.config.component import ComponentConfig
from clusterconf.config.errors import ConfigError
from clusterconf.config.manager import ConfigManager


class ConfigRenderer:
    """Renderer for component configurations."""

    def render(self, config: ComponentConfig) -> Panel:
        """Render one component as a table of serialized fields."""
        try:
            fields = config.to_dict()
        except ConfigError as e:
            return Panel(
                Text(f"Error: {e.message}", style="red"),
                title=f"{config.config_key()} (unserializable)",
                border_style="red",
            )

        table = Table(show_header=True, header_style="bold cyan", expand=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")

        for name, value in fields.items():
            table.add_row(name, value)

        return Panel(
            table,
            title=f"{config.SECTION}.{config.config_key()}",
            border_style="green",
        )

    def render_manager(self, manager: ConfigManager) -> Group:
        """Render every component held by a manager."""
        return Group(*(self.render(cfg) for cfg in manager.components()))
