"""
LoWAPP Node Identity

Decides which configuration file a simulated node instance uses.

Resolution order (first match wins):
    1. --config PATH            PATH, or DIRECTORY + PATH
    2. --uuid UUID --directory  DIRECTORY + node subdirectory + UUID
    3. anything else            not enough arguments

New nodes get a freshly generated UUID and the path
"Nodes/<uuid>"; creating the file is up to the caller.

Every resolution failure is logged at CRITICAL before the matching
NodeInitError is raised: the node cannot start without a configuration.
"""

import logging
import os
import re
import uuid
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional

from .. import DEFAULT_NODE_SUBDIR
from ..crypto.primitives import random_bytes


logger = logging.getLogger(__name__)

# Canonical 8-4-4-4-12 form, as accepted by libuuid's uuid_parse
_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)

FileExists = Callable[[str], bool]


class NodeInitError(Exception):
    """Exception raised when a node's configuration cannot be located."""
    pass


class ConfigNotFound(NodeInitError):
    """The configuration file does not exist."""
    pass


class InvalidIdentity(NodeInitError):
    """The UUID given for the node is not well formed."""
    pass


class InsufficientArguments(NodeInitError):
    """Neither a configuration path nor a directory and UUID were given."""
    pass


class IdentitySource(Enum):
    """How a node's configuration path was determined."""
    EXPLICIT_PATH = auto()    # --config relative to the working directory
    DIRECTORY_PATH = auto()   # --directory + --config
    DIRECTORY_UUID = auto()   # --directory + node subdirectory + --uuid
    GENERATED_UUID = auto()   # fresh UUID for a new node


@dataclass(frozen=True)
class NodeIdentity:
    """Resolved location of a node's configuration file."""
    source: IdentitySource
    path: str
    uuid: Optional[str] = None


@dataclass
class NodeArguments:
    """
    Identity-related program arguments.

    Any object with config, uuid and directory attributes works in its
    place (e.g. an argparse.Namespace).
    """
    config: Optional[str] = None
    uuid: Optional[str] = None
    directory: Optional[str] = None


def is_valid_uuid(text: Optional[str]) -> bool:
    """Check that text is a UUID in canonical 36-character form."""
    return text is not None and _UUID_PATTERN.fullmatch(text) is not None


def _fatal(error: NodeInitError) -> NodeInitError:
    logger.critical(str(error))
    return error


def resolve_path(
    args: Any,
    file_exists: FileExists = os.path.isfile,
    node_subdir: str = DEFAULT_NODE_SUBDIR,
) -> NodeIdentity:
    """
    Resolve the configuration file of an existing node.

    Paths are built by plain concatenation, so directory arguments are
    expected to end with a separator (e.g. "sim/").

    Args:
        args: Object with optional config, uuid and directory attributes
        file_exists: File-system query used for every candidate path
        node_subdir: Subdirectory of directory holding per-UUID files

    Returns:
        NodeIdentity: Where the configuration lives

    Raises:
        ConfigNotFound: If the candidate file does not exist
        InvalidIdentity: If the UUID argument is malformed
        InsufficientArguments: If no usable combination was given
    """
    config = getattr(args, "config", None)
    node_uuid = getattr(args, "uuid", None)
    directory = getattr(args, "directory", None)

    if config is not None:
        config = str(config)
        if file_exists(config):
            logger.debug(f"Using configuration file {config}")
            return NodeIdentity(IdentitySource.EXPLICIT_PATH, config)

        # Not relative to the working directory, try the node directory
        if directory is not None:
            path = str(directory) + config
            if file_exists(path):
                logger.debug(f"Using configuration file {path}")
                return NodeIdentity(IdentitySource.DIRECTORY_PATH, path)
            raise _fatal(ConfigNotFound(f"The config file ({path}) does not exist"))

        raise _fatal(ConfigNotFound(f"The config file ({config}) does not exist"))

    if node_uuid is not None and directory is not None:
        if not is_valid_uuid(node_uuid):
            raise _fatal(InvalidIdentity(
                f"The UUID passed as parameter is not valid: {node_uuid!r}"
            ))

        path = str(directory) + node_subdir + node_uuid
        if file_exists(path):
            logger.debug(f"Using configuration file {path} for node {node_uuid}")
            return NodeIdentity(IdentitySource.DIRECTORY_UUID, path, node_uuid)
        raise _fatal(ConfigNotFound(f"The config file ({path}) does not exist"))

    raise _fatal(InsufficientArguments(
        "Not enough parameters were sent to the program. "
        "For correct usage, see --help option"
    ))


def generate_uuid() -> str:
    """Generate a random version 4 UUID in canonical form."""
    return str(uuid.UUID(bytes=random_bytes(16), version=4))


def generate_identity(node_subdir: str = DEFAULT_NODE_SUBDIR) -> NodeIdentity:
    """
    Create the identity of a new node.

    Args:
        node_subdir: Prefix of the configuration path

    Returns:
        NodeIdentity: Fresh UUID and its configuration path. The file
        itself is not created.
    """
    node_uuid = generate_uuid()
    path = node_subdir + node_uuid
    logger.info(f"Generated node identity {node_uuid}")
    return NodeIdentity(IdentitySource.GENERATED_UUID, path, node_uuid)
