"""SO(3) rotation operations in JAX.

This module implements the rotation half of the pose algebra: rotation
matrices and the roll/pitch/yaw representation shared by SDF and URDF.
All functions are pure, JIT-able, and operate on JAX arrays.

The rpy convention is fixed-axis X, then Y, then Z, which gives
R = Rz(yaw) @ Ry(pitch) @ Rx(roll).
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def from_rpy(rpy: Array) -> Array:
    """
    Convert roll-pitch-yaw angles to rotation matrices.

    Args:
        rpy: (..., 3) array of [roll, pitch, yaw] angles in radians

    Returns:
        (..., 3, 3) array of rotation matrices
    """
    rpy = jnp.asarray(rpy, dtype=jnp.float64)
    roll, pitch, yaw = jnp.moveaxis(rpy, -1, 0)

    cr, sr = jnp.cos(roll), jnp.sin(roll)
    cp, sp = jnp.cos(pitch), jnp.sin(pitch)
    cy, sy = jnp.cos(yaw), jnp.sin(yaw)

    # Expanded form of Rz(yaw) @ Ry(pitch) @ Rx(roll)
    return jnp.stack([
        jnp.stack([cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr], axis=-1),
        jnp.stack([sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr], axis=-1),
        jnp.stack([-sp, cp * sr, cp * cr], axis=-1),
    ], axis=-2)


def to_rpy(R: Array) -> Array:
    """
    Convert rotation matrices to roll-pitch-yaw angles.

    Pitch is returned in [-pi/2, pi/2]. Roll is extracted after undoing the
    yaw, so rebuilding the matrix stays exact even as pitch approaches
    +-pi/2. At gimbal lock roll and yaw are not independent; yaw is set to
    zero and the whole rotation about the vertical is folded into roll.

    Args:
        R: (..., 3, 3) array of rotation matrices

    Returns:
        (..., 3) array of [roll, pitch, yaw] angles in radians
    """
    R = jnp.asarray(R, dtype=jnp.float64)
    eps = jnp.finfo(R.dtype).eps * 4.0

    cos_pitch = jnp.sqrt(R[..., 0, 0] ** 2 + R[..., 1, 0] ** 2)
    locked = cos_pitch <= eps

    pitch = jnp.arctan2(-R[..., 2, 0], cos_pitch)
    yaw = jnp.where(locked, 0.0, jnp.arctan2(R[..., 1, 0], R[..., 0, 0]))

    # Rows of Rz(yaw)^T @ R hold sin(roll) and cos(roll) unscaled by cos(pitch)
    cy, sy = jnp.cos(yaw), jnp.sin(yaw)
    roll = jnp.arctan2(
        sy * R[..., 0, 2] - cy * R[..., 1, 2],
        cy * R[..., 1, 1] - sy * R[..., 0, 1],
    )

    return jnp.stack([roll, pitch, yaw], axis=-1)


def multiply(R_ab: Array, R_bc: Array) -> Array:
    """R_ab @ R_bc."""
    return jnp.matmul(R_ab, R_bc)


def inverse(R: Array) -> Array:
    """Transpose, which is the inverse of an orthonormal matrix."""
    return jnp.swapaxes(R, -1, -2)


def apply(R: Array, v: Array) -> Array:
    """
    Rotate a vector or a set of vectors.

    Args:
        R: (..., 3, 3) rotation matrix
        v: (..., 3) single vector or (..., N, 3) vector set

    Returns:
        Rotated vectors with the shape of *v*
    """
    v = jnp.asarray(v)
    if v.ndim == R.ndim - 1:
        return jnp.einsum("...ij,...j->...i", R, v)
    return jnp.einsum("...ij,...nj->...ni", R, v)
