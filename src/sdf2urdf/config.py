"""Conversion options and their YAML loader."""

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from sdf2urdf.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOptions:
    """Settings for one conversion pass.

    Attributes:
        indent: Indentation added per nesting level
        precision: Significant digits used when printing numbers
        zero_tolerance: Magnitudes below this print as 0
        strict: Fail the whole conversion when a joint names an unknown link,
                instead of dropping that joint
    """
    indent: str = "  "
    precision: int = 6
    zero_tolerance: float = 1e-12
    strict: bool = False

    def __post_init__(self):
        if not isinstance(self.indent, str) or self.indent.strip():
            raise ConfigurationError("indent must be a string of whitespace")
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) \
                or not 1 <= self.precision <= 17:
            raise ConfigurationError(f"precision must be an integer in [1, 17], got {self.precision!r}")
        if isinstance(self.zero_tolerance, bool) or not isinstance(self.zero_tolerance, (int, float)) \
                or self.zero_tolerance < 0:
            raise ConfigurationError(f"zero_tolerance must be a non-negative number, got {self.zero_tolerance!r}")
        if not isinstance(self.strict, bool):
            raise ConfigurationError(f"strict must be true or false, got {self.strict!r}")

    def replace(self, **changes: Any) -> "ConversionOptions":
        return dataclasses.replace(self, **changes)


def options_from_dict(data: Dict[str, Any]) -> ConversionOptions:
    """Build options from a mapping, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a mapping")

    known = {f.name for f in dataclasses.fields(ConversionOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {unknown}")

    return ConversionOptions(**data)


def load_options(path: Union[str, Path]) -> ConversionOptions:
    """Load options from a YAML file.

    An empty file gives the defaults.

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid options
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    logger.debug("Loaded configuration from %s", path)
    return options_from_dict(data or {})
