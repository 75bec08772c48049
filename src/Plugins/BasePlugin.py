"""
BasePlugin module.

Defines the abstract BasePlugin class that every host plugin extends. The host
drives plugins through execute_pipeline_step.
"""
from abc import ABC, abstractmethod


class BasePlugin(ABC):
    """
    Base class for all plugins.

    Subclasses set ``plugin_type`` so the PluginManager can file them under the
    right capability, and ``required_host_version`` so it can refuse plugins the
    running host is too old for.
    """

    plugin_type = None

    # Lowest host version the plugin works with
    required_host_version = "1.0.0"

    @abstractmethod
    def execute_pipeline_step(self, step_config: dict, context: dict) -> dict:
        """Execute a pipeline step for this plugin

        Args:
            step_config (dict): Configuration for this step from the pipeline YAML
            context (dict): Current pipeline context with variables

        Returns:
            dict: Updated context with any new variables
        """
        pass
