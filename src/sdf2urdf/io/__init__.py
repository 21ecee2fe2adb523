"""I/O utilities for reading SDF documents and rendering URDF text.

This module provides the SDF loader and navigation interface consumed by
the converters, and the formatter used to print URDF values.
"""

from .formatting import XML_HEADER, UrdfFormatter
from .sdf_document import SdfElement, Vector3, find_model, load_sdf, parse_sdf

__all__ = [
    "SdfElement",
    "Vector3",
    "find_model",
    "load_sdf",
    "parse_sdf",
    "UrdfFormatter",
    "XML_HEADER",
]
