"""Core data structures for a conversion pass.

This module provides the link-pose registry consulted during joint
reparenting and the block / issue / result types every converter returns.
"""

from .registry import LinkPoseRegistry
from .report import (
    Block,
    ConversionIssue,
    ConversionResult,
    GeometryKind,
    SensorKind,
    Severity,
)

__all__ = [
    "LinkPoseRegistry",
    "Block",
    "ConversionIssue",
    "ConversionResult",
    "GeometryKind",
    "SensorKind",
    "Severity",
]
