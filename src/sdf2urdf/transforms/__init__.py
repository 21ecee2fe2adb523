"""
JAX-based pose algebra for robot description conversion.

This module provides:
- SO(3) rotations and roll/pitch/yaw conversion (so3 module)
- SE(3) rigid body transforms (se3 module)
- the Pose value type with compose / reparent (pose module)

All functions are pure and stateless.
"""

from . import so3
from . import se3
from .pose import Pose, child_to_parent_frame, compose, reparent

__all__ = [
    "so3",
    "se3",
    "Pose",
    "compose",
    "reparent",
    "child_to_parent_frame",
]
