"""Rigid-body poses and the compose / reparent algebra.

A :class:`Pose` is the translation + roll/pitch/yaw pair that both SDF and
URDF write as six numbers. Every operation goes through full SE(3)
matrices, so chaining rotated frames is exact and never a per-axis sum of
Euler angles.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

import jax
import jax.numpy as jnp
import numpy as np
from flax import struct

from . import se3, so3

Array = jax.Array


@struct.dataclass
class Pose:
    """Immutable rigid-body transform: translation (x, y, z) + rotation (roll, pitch, yaw)."""
    translation: Array  # shape (3,)
    rotation: Array     # shape (3,), radians

    # Constructors
    @classmethod
    def identity(cls) -> "Pose":
        return cls(jnp.zeros(3, dtype=jnp.float64), jnp.zeros(3, dtype=jnp.float64))

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "Pose":
        """Build a pose from ``x y z roll pitch yaw``."""
        values = jnp.asarray(tuple(values), dtype=jnp.float64)
        if values.shape != (6,):
            raise ValueError(f"pose needs 6 values, got shape {values.shape}")
        return cls(values[:3], values[3:])

    @classmethod
    def from_matrix(cls, T: Array) -> "Pose":
        T = jnp.asarray(T, dtype=jnp.float64)
        if T.shape != (4, 4):
            raise ValueError(f"matrix must have shape (4,4), got {T.shape}")
        return cls(se3.get_position(T), so3.to_rpy(se3.get_rotation(T)))

    # Conversions
    def to_matrix(self) -> Array:
        return se3.from_position_and_rotation(self.translation, so3.from_rpy(self.rotation))

    def rotation_matrix(self) -> Array:
        return so3.from_rpy(self.rotation)

    def values(self) -> Tuple[float, ...]:
        """The six components as plain Python floats."""
        values = np.asarray(jnp.concatenate([self.translation, self.rotation]), dtype=np.float64)
        return tuple(float(v) for v in values)

    # Basic operations
    def inverse(self) -> "Pose":
        return Pose.from_matrix(se3.inverse(self.to_matrix()))

    def is_close(self, other: "Pose", atol: float = 1e-9) -> bool:
        """Compare as transforms, so equivalent rpy triples count as equal."""
        return bool(jnp.allclose(self.to_matrix(), other.to_matrix(), rtol=0.0, atol=atol))


def compose(outer: Pose, inner: Pose) -> Pose:
    """Pose of *inner*'s frame expressed in *outer*'s reference frame.

    Translation is ``outer.t + R(outer) @ inner.t`` and rotation is
    ``R(outer) @ R(inner)``.
    """
    return Pose.from_matrix(se3.multiply(outer.to_matrix(), inner.to_matrix()))


def reparent(pose_in_ref: Pose, new_ref: Pose) -> Pose:
    """Express *pose_in_ref* relative to *new_ref* instead of the original reference.

    Translation is ``R(new_ref)^T @ (t - new_ref.t)`` and rotation is
    ``R(new_ref)^T @ R(pose)``. This undoes :func:`compose`:
    ``reparent(compose(R, P), R) == P``.
    """
    return Pose.from_matrix(se3.multiply(se3.inverse(new_ref.to_matrix()), pose_in_ref.to_matrix()))


def child_to_parent_frame(
    pose_in_child: Pose,
    child_pose: Pose,
    parent_pose: Pose,
    model_frame: Optional[Pose] = None,
) -> Pose:
    """Move a pose declared in a child link's frame into its parent link's frame.

    Args:
        pose_in_child: Pose relative to the child link (SDF joint convention)
        child_pose: Child link pose in the model frame
        parent_pose: Parent link pose in the model frame
        model_frame: Model frame pose, identity when omitted

    Returns:
        The same pose relative to the parent link (URDF joint convention)
    """
    if model_frame is None:
        model_frame = Pose.identity()
    in_model = compose(model_frame, compose(child_pose, pose_in_child))
    return reparent(in_model, parent_pose)
