"""
LoWAPP Node Module

Configuration file discovery for node instances, and parsing and
writing of configuration files.
"""

from .identity import (
    NodeInitError,
    ConfigNotFound,
    InvalidIdentity,
    InsufficientArguments,
    IdentitySource,
    NodeIdentity,
    NodeArguments,
    is_valid_uuid,
    resolve_path,
    generate_uuid,
    generate_identity,
)

from .loader import (
    MalformedLine,
    LoadResult,
    parse_line,
    load_lines,
    load_config,
    format_config,
    save_config,
)

__all__ = [
    # Identity
    'NodeInitError',
    'ConfigNotFound',
    'InvalidIdentity',
    'InsufficientArguments',
    'IdentitySource',
    'NodeIdentity',
    'NodeArguments',
    'is_valid_uuid',
    'resolve_path',
    'generate_uuid',
    'generate_identity',
    # Loader
    'MalformedLine',
    'LoadResult',
    'parse_line',
    'load_lines',
    'load_config',
    'format_config',
    'save_config',
]
