"""Shared plugin infrastructure and abstract base classes."""

from abc import ABC, abstractmethod
from enum import Enum
from graphlib import CycleError, TopologicalSorter
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from blogpress.logger import get_logger

logger = get_logger(__name__)

ConfigT = TypeVar("ConfigT")
PluginT = TypeVar("PluginT")
PluginNameT = TypeVar("PluginNameT", bound=Enum)


def _plugin_key(name: Enum | str) -> str:
    """Normalise an enum member or raw string plugin name to its string key."""
    return name.value if isinstance(name, Enum) else name


class PluginNameEnum(str, Enum):
    """Base class for plugin name enums."""

    pass


class BasePluginConfig(BaseModel, Generic[PluginNameT]):
    """Base configuration for all plugins."""

    enabled: bool = True
    after_dependencies: list[PluginNameT] = Field(
        default_factory=list,
        description="List of plugins that must run before this plugin",
    )
    before_dependencies: list[PluginNameT] = Field(
        default_factory=list,
        description="List of plugins that must run after this plugin",
    )


class BasePluginManager(ABC, Generic[ConfigT, PluginT]):
    """Base class for plugin managers with dependency resolution."""

    def __init__(self) -> None:
        self.plugins: list[PluginT] = []
        self._plugin_registry: dict[str, type[PluginT]] = {}

    @abstractmethod
    def load_plugin(self, name: str, config: ConfigT) -> PluginT:
        """Load and configure a plugin."""
        pass

    def register_plugin(self, name: str, plugin_class: type[PluginT]) -> None:
        """Register a custom plugin class."""
        self._plugin_registry[name] = plugin_class

    def _resolve_plugin_dependencies(
        self, plugin_configs: list[ConfigT]
    ) -> list[ConfigT]:
        """Resolve plugin dependencies using topological sorting."""
        plugin_config_map = {
            _plugin_key(config.name): config
            for config in plugin_configs
            if config.enabled
        }

        for name, config in plugin_config_map.items():
            for dep in [*config.after_dependencies, *config.before_dependencies]:
                if _plugin_key(dep) not in plugin_config_map:
                    raise ValueError(
                        f"Plugin '{name}' depends on '{_plugin_key(dep)}' "
                        f"which is not enabled or doesn't exist"
                    )

        # node -> predecessors. Entries may be created early by another
        # plugin's before_dependencies, so always merge.
        graph: dict[str, set[str]] = {}
        for name, config in plugin_config_map.items():
            graph.setdefault(name, set()).update(
                _plugin_key(dep) for dep in config.after_dependencies
            )
            for dep in config.before_dependencies:
                graph.setdefault(_plugin_key(dep), set()).add(name)

        try:
            sorted_plugin_names = list(TopologicalSorter(graph).static_order())
        except CycleError as e:
            plugin_type = self.__class__.__name__.replace("Manager", "").lower()
            raise ValueError(
                f"Circular dependency detected in {plugin_type} plugins: {e}"
            ) from e

        return [plugin_config_map[name] for name in sorted_plugin_names]

    def load_plugins_from_config(self, plugin_configs: list[ConfigT]) -> None:
        """Load plugins from config in dependency-resolved order."""
        sorted_configs = self._resolve_plugin_dependencies(plugin_configs)

        logger.info(
            "Loading plugins in dependency-resolved order: "
            f"{[_plugin_key(config.name) for config in sorted_configs]}"
        )

        for plugin_config in sorted_configs:
            plugin = self.load_plugin(plugin_config.name, plugin_config)
            self.plugins.append(plugin)

    def teardown(self) -> None:
        """Teardown all loaded plugins."""
        for plugin in self.plugins:
            plugin.teardown()
        self.plugins.clear()
