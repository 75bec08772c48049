"""
Command line host for the machine translation connectors.

Stands in for the host application's dialogs: it lists connectors, edits their
configuration, toggles them and runs single translations.
"""
import os
import sys
import logging
import argparse
from typing import Any, Dict, List, Optional

import yaml  # Used to load config.yaml

from Preferences import Preferences, PreferencesError
from CredentialsManager import CredentialsManager, TransientCredentialStore
from Plugins.PluginManager import PluginManager
from Plugins.MachineTranslation.BaseMachineTranslator.errors import MachineTranslationError
from Plugins.MachineTranslation.BaseMachineTranslator.transport import HttpTransport

logger = logging.getLogger(__name__)

CREDENTIAL_IDS = ["microsoft.api.subscription_key", "mtuoc.apikey"]


def configure_logging(log_level: str = "INFO", log_file: Optional[str] = "mt_connectors.log") -> None:
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a"))
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def load_config(path: str = "config.yaml") -> Dict[str, Any]:
    """Loads config.yaml; a missing file yields an empty configuration."""
    if not os.path.exists(path):
        logger.info(f"{path} not found, using defaults")
        return {}
    with open(path, "r") as f:
        config = yaml.safe_load(f)
    return config or {}


def build_plugin_manager(config: Dict[str, Any]) -> PluginManager:
    settings = config.get("settings", {}) or {}
    preferences = Preferences(settings.get("preferences_file", "preferences.yaml"))
    transient = TransientCredentialStore.from_environment(CREDENTIAL_IDS, settings.get("env_file", ".env"))
    credentials = CredentialsManager(preferences, transient)
    transport = HttpTransport(timeout=settings.get("http_timeout"))
    return PluginManager(config=config, preferences=preferences, credentials=credentials, transport=transport)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Machine translation connectors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  Configure MTUOC:   python main.py configure Mtuoc --url http://localhost --port 8000
  Configure Azure:   python main.py configure AzureTranslator --key KEY --region westeurope
  Translate:         python main.py translate Mtuoc --source en --target ca "Hello"
""")
    parser.add_argument('--config', default="config.yaml", help='Path of config.yaml')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List connectors")

    configure = sub.add_parser("configure", help="Show or change connector settings")
    configure.add_argument("connector")
    configure.add_argument("--url", help="Endpoint URL")
    configure.add_argument("--port", help="Endpoint port")
    configure.add_argument("--key", help="API key / credential")
    configure.add_argument("--temporary", action="store_true",
                           help="Keep the credential for this session only")
    configure.add_argument("--region", help="Azure resource region")

    for command in ("enable", "disable"):
        toggle = sub.add_parser(command, help=f"{command.capitalize()} a connector")
        toggle.add_argument("connector")

    translate = sub.add_parser("translate", help="Translate text with a connector")
    translate.add_argument("connector")
    translate.add_argument("--source", required=True, help="Source language, e.g. en")
    translate.add_argument("--target", required=True, help="Target language, e.g. ca")
    translate.add_argument("text")
    return parser


def _connector(manager: PluginManager, name: str):
    connector = manager.get_plugin(name)
    if connector is None:
        available = ", ".join(sorted(manager.get_plugins("MachineTranslation"))) or "none"
        print(f"Unknown connector '{name}'. Available: {available}")
    return connector


def run(argv: Optional[List[str]] = None, manager: Optional[PluginManager] = None) -> int:
    args = build_parser().parse_args(argv)

    if manager is None:
        try:
            config = load_config(args.config)
        except yaml.YAMLError as e:
            print(f"Error parsing {args.config}: {e}")
            return 1
        settings = config.get("settings", {}) or {}
        configure_logging("DEBUG" if args.verbose else settings.get("log_level", "INFO"),
                          settings.get("log_file", "mt_connectors.log"))
        try:
            manager = build_plugin_manager(config)
        except PreferencesError as e:
            print(f"Error loading preferences: {e}")
            return 1

    for error in manager.loading_errors:
        print(f"Plugin loading error: {error}")

    if args.command == "list":
        for name, connector in sorted(manager.get_plugins("MachineTranslation").items()):
            status = "enabled" if connector.is_enabled() else "disabled"
            print(f"{name}\t{connector.get_name()}\t{status}")
        return 0

    connector = _connector(manager, args.connector)
    if connector is None:
        return 1

    if args.command in ("enable", "disable"):
        connector.set_enabled(args.command == "enable")
        print(f"{connector.get_name()} {args.command}d")
        return 0

    if args.command == "configure":
        settings = connector.get_configuration()
        # Only an explicit --key touches the stored credential
        settings.credential = ""
        changed = False
        if args.url is not None:
            settings.endpoint_url = args.url
            changed = True
        if args.port is not None:
            settings.endpoint_port = args.port
            changed = True
        if args.key is not None:
            settings.credential = args.key
            settings.persist_credential = not args.temporary
            changed = True
        if changed:
            connector.apply_configuration(settings)
        if args.region is not None and hasattr(connector, "set_region"):
            connector.set_region(args.region)
        current = connector.get_configuration()
        print(f"endpoint_url: {current.endpoint_url}")
        print(f"endpoint_port: {current.endpoint_port}")
        print(f"credential: {'set' if current.credential else 'not set'}")
        print(f"persist_credential: {current.persist_credential}")
        return 0

    try:
        print(connector.get_translation(args.source, args.target, args.text))
    except MachineTranslationError as e:
        logger.error(f"Translation with {args.connector} failed: {e}")
        print(f"{e.kind} error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
