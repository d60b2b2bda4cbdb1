"""
LoWAPP Node Entry Point

Locates and loads a simulated node's configuration at startup, or
creates the configuration of a new node.

Usage:
    lowapp-node -c node.cfg
    lowapp-node -d sim/ -u 1b4e28ba-2fa1-11d2-883f-0016d3cca427
    lowapp-node -d sim/ --new
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import toml

from . import __version__
from .config.codec import ConfigError
from .config.store import ConfigStore
from .crypto.primitives import generate_enc_key, key_fingerprint
from .node.identity import NodeIdentity, NodeInitError, generate_identity, resolve_path
from .node.loader import load_config, save_config
from .settings import Settings


logger = logging.getLogger("lowapp")

# Return codes of node_init
NODE_INIT_OK = 0
NODE_INIT_FAILED = -1


def load_node(store: ConfigStore, args: Any, settings: Settings) -> NodeIdentity:
    """
    Resolve a node's configuration file and load it into store.

    Args:
        store: Store receiving the configuration
        args: Object with optional config, uuid and directory attributes
        settings: Simulator settings

    Returns:
        NodeIdentity: Where the configuration was loaded from

    Raises:
        NodeInitError: If the configuration file cannot be located
        ConfigError: If the file holds a malformed value (strict loads)
        OSError: If the file cannot be read
    """
    identity = resolve_path(args, node_subdir=settings.node_subdir)

    try:
        result = load_config(store, identity.path, strict=settings.strict)
    except (OSError, ConfigError) as e:
        logger.critical(f"Failed to load {identity.path}: {e}")
        raise

    logger.info(
        f"Loaded {identity.path}: device 0x{store.device_id:02X}, "
        f"group 0x{store.group_id:04X}, key {key_fingerprint(store.enc_key)}"
    )
    if not result.ok:
        logger.warning(f"{len(result.skipped)} configuration lines skipped")
    return identity


def node_init(store: ConfigStore, args: Any, settings: Optional[Settings] = None) -> int:
    """
    Startup boundary around load_node().

    Returns:
        int: 0 on success, -1 on any failure (the reason is logged)
    """
    try:
        load_node(store, args, settings or Settings())
    except (NodeInitError, ConfigError, OSError):
        return NODE_INIT_FAILED
    return NODE_INIT_OK


def create_node(directory: Optional[str], settings: Settings) -> NodeIdentity:
    """
    Create the configuration file of a new node.

    The file holds zeroed parameters and a fresh encryption key.

    Returns:
        NodeIdentity: Identity of the new node; path includes directory
    """
    generated = generate_identity(settings.node_subdir)
    path = (directory or "") + generated.path

    store = ConfigStore()
    store.set("encKey", generate_enc_key().hex())
    save_config(store, path)

    return NodeIdentity(generated.source, path, generated.uuid)


def print_config(path: str, store: ConfigStore) -> None:
    """Print a loaded configuration, key fingerprinted."""
    print(f"Node configuration: {path}")
    print("=" * 60)
    for key, value in store.items():
        if key == "encKey":
            value = f"<fingerprint {key_fingerprint(store.enc_key)}>"
        print(f"  {key:<14} {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LoWAPP simulated node configuration")
    parser.add_argument(
        "-c", "--config",
        help="Configuration file path (relative to the working directory or --directory)",
    )
    parser.add_argument(
        "-u", "--uuid",
        help="UUID of the node (requires --directory)",
    )
    parser.add_argument(
        "-d", "--directory",
        help="Simulation directory, with trailing separator",
    )
    parser.add_argument(
        "--new",
        action="store_true",
        help="Create the configuration of a new node",
    )
    parser.add_argument(
        "-s", "--settings",
        type=Path,
        default=None,
        help="Simulator settings file",
    )
    parser.add_argument(
        "--no-strict",
        action="store_true",
        help="Skip malformed configuration values instead of failing",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"lowapp-node {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = Settings.load(args.settings)
        settings.validate()
    except (toml.TomlDecodeError, ValueError) as e:
        logger.error(f"Settings error: {e}")
        return 1

    # Set log level
    logging.getLogger().setLevel(logging.DEBUG if args.verbose else settings.log_level_value)

    if args.no_strict:
        settings.strict = False
    if args.directory is None:
        args.directory = settings.directory

    if args.new:
        try:
            identity = create_node(args.directory, settings)
        except OSError as e:
            logger.error(f"Failed to create node: {e}")
            return 1
        print(f"Node UUID: {identity.uuid}")
        print(f"Config:    {identity.path}")
        return 0

    store = ConfigStore()
    try:
        identity = load_node(store, args, settings)
    except (NodeInitError, ConfigError, OSError):
        return 1

    print_config(identity.path, store)
    return 0


if __name__ == "__main__":
    sys.exit(main())
