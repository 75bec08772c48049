"""PluginManager module.

Discovers and loads machine translation connectors from the 'Plugins' directory.
Connectors must inherit from BaseMachineTranslator and declare the lowest host
version they support; connectors that need a newer host are refused at load time.
"""

import importlib
import os
import sys
import inspect
import logging
from typing import Dict, List, Optional, Set, Tuple

from Preferences import Preferences
from CredentialsManager import CredentialsManager
from Plugins.MachineTranslation.BaseMachineTranslator.transport import HttpTransport

HOST_VERSION = "1.2.0"


def parse_version(version: str) -> Tuple[int, ...]:
    '''Parses a dotted version such as "5.8.0" into a tuple of ints.

    Raises:
        ValueError: If any component is not a number.
    '''
    parts = str(version).strip().split(".")
    return tuple(int(part) for part in parts)


def compare_versions(left: str, right: str) -> int:
    '''Returns a negative number, zero or a positive number as left is lower, equal or higher than right.'''
    a = parse_version(left)
    b = parse_version(right)
    width = max(len(a), len(b))
    a = a + (0,) * (width - len(a))
    b = b + (0,) * (width - len(b))
    return (a > b) - (a < b)


class PluginManager:
    '''Manages the discovery and loading of connector plugins.

    Attributes:
        plugins_path (str): Path to the plugins directory, relative to src.
        plugins (Dict[str, Dict[str, object]]): Loaded plugins keyed by plugin type, then by name.
        warnings (Set[str]): Warnings encountered during plugin loading.
        loading_errors (List[str]): Connectors refused by the host version check.
    '''

    def __init__(
        self,
        plugins_path="Plugins",
        config=None,
        preferences: Optional[Preferences] = None,
        credentials: Optional[CredentialsManager] = None,
        transport: Optional[HttpTransport] = None,
        host_version: str = HOST_VERSION,
        discover: bool = True
    ):
        '''Initializes the PluginManager instance.

        Args:
            plugins_path (str): Path to the plugins directory. Defaults to "Plugins".
            config (dict): Optional configuration containing plugin enable/disable lists
            preferences (Preferences): Host preference store handed to every connector
            credentials (CredentialsManager): Host credential store handed to every connector
            transport (HttpTransport): Shared HTTP transport
            host_version (str): Version the connectors are checked against
            discover (bool): Scan the plugins directory immediately
        '''
        self.plugins_path = plugins_path
        self.plugins: Dict[str, Dict[str, object]] = {}
        self.plugin_types = ["MachineTranslation"]
        self.warnings: Set[str] = set()
        self.loading_errors: List[str] = []
        self.config = config or {}
        self.host_version = host_version
        self.preferences = preferences if preferences is not None else Preferences(path=None)
        self.credentials = credentials if credentials is not None else CredentialsManager(self.preferences)
        self.transport = transport if transport is not None else HttpTransport()
        self.logger = logging.getLogger(__name__)

        # Add src directory to Python path for imports
        src_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        if src_dir not in sys.path:
            sys.path.append(src_dir)

        if discover:
            for plugin_type in self.plugin_types:
                self._load_plugins_of_type(plugin_type)

            loaded_plugins = {ptype: list(pdict.keys()) for ptype, pdict in self.plugins.items() if pdict}
            self.logger.info(f"Loaded plugins: {loaded_plugins}")
            for warning in sorted(self.warnings):
                self.logger.warning(warning)

    def _load_plugins_of_type(self, plugin_type: str):
        '''Loads all plugins of a specific type.

        Args:
            plugin_type (str): Type of plugin to load.
        '''
        src_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        plugin_type_path = os.path.join(src_dir, self.plugins_path, plugin_type)
        if not os.path.isdir(plugin_type_path):
            return

        plugin_config = self.config.get('plugins', {}) or {}
        enabled_plugins = plugin_config.get('enabled')
        disabled_plugins = plugin_config.get('disabled', []) or []

        plugin_folders = sorted(
            f for f in os.listdir(plugin_type_path)
            if os.path.isdir(os.path.join(plugin_type_path, f)) and not f.startswith('__')
        )
        self.logger.debug(f"Found plugin folders: {plugin_folders}")

        for folder in plugin_folders:
            possible_names = [folder, f"{plugin_type}.{folder}"]
            is_enabled = (enabled_plugins is None) or any(name in enabled_plugins for name in possible_names)
            is_disabled = any(name in disabled_plugins for name in possible_names)
            if is_disabled:
                self.warnings.add(f"Plugin {plugin_type}.{folder} is disabled by config")
                continue
            if not is_enabled:
                self.warnings.add(f"Plugin {plugin_type}.{folder} not in enabled list")
                continue

            plugin_file = os.path.join(plugin_type_path, folder, f"{folder}.py")
            if not os.path.exists(plugin_file):
                continue

            module_name = f"Plugins.{plugin_type}.{folder}.{folder}"
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                self.warnings.add(f"Error importing module {module_name}: {str(e)}")
                continue

            plugin_class = getattr(module, folder, None)
            if not inspect.isclass(plugin_class) or inspect.isabstract(plugin_class):
                self.logger.debug(f"No concrete plugin class '{folder}' in {module_name}")
                continue
            if getattr(plugin_class, 'plugin_type', None) != plugin_type:
                self.logger.debug(f"Class {folder} has plugin_type {getattr(plugin_class, 'plugin_type', None)}")
                continue

            self.register_connector(plugin_class, name=folder)

    def register_connector(self, plugin_class, name: Optional[str] = None) -> bool:
        '''Checks a connector class against the host version and registers an instance.

        Args:
            plugin_class: Connector class to register.
            name (str): Registration name, the class name by default.

        Returns:
            bool: True if the connector was registered.
        '''
        name = name or plugin_class.__name__
        required = getattr(plugin_class, 'required_host_version', None)
        try:
            if required is not None and compare_versions(self.host_version, required) < 0:
                self._loading_error(
                    f"{name} cannot be loaded because host version {self.host_version} "
                    f"is lower than required version {required}"
                )
                return False
        except ValueError:
            self._loading_error(f"{name} cannot be loaded because this host version is not supported")
            return False

        try:
            plugin_instance = plugin_class(
                preferences=self.preferences,
                credentials=self.credentials,
                transport=self.transport
            )
        except Exception as e:
            self.warnings.add(f"Error instantiating plugin {name}: {str(e)}")
            self.logger.error(f"Error instantiating plugin {name}: {e}", exc_info=True)
            return False

        self.plugins.setdefault(plugin_class.plugin_type, {})[name] = plugin_instance
        self.logger.info(f"Successfully loaded plugin: {name}")
        return True

    def _loading_error(self, message: str) -> None:
        self.loading_errors.append(message)
        self.logger.error(message)

    def get_plugins(self, plugin_type=None):
        '''Gets all plugins or plugins of a specific type.

        Args:
            plugin_type (str): Type of plugin to get. If None, returns all plugins.

        Returns:
            dict: Dictionary of plugins, where keys are plugin names and values are plugin instances.
        '''
        if plugin_type:
            return self.plugins.get(plugin_type, {})
        return self.plugins

    def get_plugin(self, name, plugin_type="MachineTranslation"):
        '''Gets a specific plugin instance, or None if it is not loaded.'''
        return self.plugins.get(plugin_type, {}).get(name)

    def get_enabled_connectors(self):
        '''Connectors whose enable flag is set in the host preferences.'''
        return {
            name: plugin
            for name, plugin in self.get_plugins("MachineTranslation").items()
            if plugin.is_enabled()
        }
