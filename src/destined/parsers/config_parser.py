"""
Parser for ``key = value`` config files.

Rules:
- every non-blank line holds exactly one '='
- keys are case-insensitive (stored lower-cased), values are case-sensitive
- every required key must be present
- keys that are neither required nor available are dropped
- available keys with a default are filled in when absent

Required and available keys must be given as lower-case literals.
"""

import logging
from pathlib import Path
from typing import AbstractSet, Dict, Iterable, Mapping, Optional, Union

from destined.parsers.errors import FileParsingError

log = logging.getLogger(__name__)

AvailableKeys = Union[Mapping[str, str], Iterable[str]]


def _defaults(available_keys: Optional[AvailableKeys]) -> Dict[str, Optional[str]]:
    """Normalise available keys to a key → default map (None means no default)."""
    if available_keys is None:
        return {}
    if isinstance(available_keys, Mapping):
        return dict(available_keys)
    return {key: None for key in available_keys}


def parse_config_lines(
    lines: Iterable[str],
    required_keys: AbstractSet[str],
    available_keys: Optional[AvailableKeys] = None,
) -> Dict[str, str]:
    """
    Parse config lines into a settings map.

    Args:
        lines: Raw config lines
        required_keys: Keys that must appear
        available_keys: Optional keys, either a mapping of key → default or
            a plain collection of keys without defaults

    Returns:
        Dict of lower-cased key → trimmed value

    Raises:
        FileParsingError: on a line without exactly one '=' or a missing
            required key
    """
    defaults = _defaults(available_keys)
    config: Dict[str, str] = {}

    for line_num, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue

        words = line.split("=")
        if len(words) != 2:
            raise FileParsingError(
                f"Check config file syntax on line {line_num}: '{line}'", line=line_num
            )
        config[words[0].strip().lower()] = words[1].strip()

    for key in sorted(required_keys):
        if key not in config:
            raise FileParsingError(f"Config file must contain the key '{key}'")

    for key in list(config):
        if key not in required_keys and key not in defaults:
            log.debug("Dropping unknown config key '%s'", key)
            del config[key]

    for key, default in defaults.items():
        if key not in config and default is not None:
            config[key] = default

    return config


def read_config_file(
    file_path: Union[str, Path],
    required_keys: AbstractSet[str],
    available_keys: Optional[AvailableKeys] = None,
) -> Dict[str, str]:
    """Read and parse a config file. See parse_config_lines for the rules."""
    path = Path(file_path)
    try:
        with path.open(encoding="utf-8-sig") as f:
            config = parse_config_lines(f, required_keys, available_keys)
    except (OSError, UnicodeDecodeError) as e:
        raise FileParsingError("Could not read config file") from e

    log.debug("Read %d config keys from %s", len(config), path)
    return config
