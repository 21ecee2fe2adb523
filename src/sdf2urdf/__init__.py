"""
sdf2urdf: convert SDF robot descriptions into URDF.

This library walks an SDF model, projects each link, sensor and joint into
URDF text, and re-expresses joint poses in URDF's parent-link frame using
exact SE(3) composition.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from . import io
from .config import ConversionOptions, load_options
from .converter import convert_document, convert_file, convert_string

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "io",
    "ConversionOptions",
    "load_options",
    "convert_document",
    "convert_file",
    "convert_string",
]
