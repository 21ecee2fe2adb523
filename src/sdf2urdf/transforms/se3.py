"""Homogeneous 4x4 transforms in JAX.

The pose algebra in :mod:`sdf2urdf.transforms.pose` goes through these
matrices so that chained frames are composed exactly. Functions broadcast
over leading batch dimensions.
"""

import jax
import jax.numpy as jnp

from . import so3

Array = jax.Array


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Build a homogeneous transform.

    Args:
        p: (..., 3) translation
        R: (..., 3, 3) rotation matrix

    Returns:
        (..., 4, 4) matrix [[R, p], [0, 1]]
    """
    p = jnp.asarray(p, dtype=jnp.float64)
    R = jnp.asarray(R, dtype=jnp.float64)

    batch = jnp.broadcast_shapes(p.shape[:-1], R.shape[:-2])
    top = jnp.concatenate(
        [jnp.broadcast_to(R, batch + (3, 3)), jnp.broadcast_to(p, batch + (3,))[..., None]],
        axis=-1,
    )
    bottom = jnp.broadcast_to(jnp.array([0.0, 0.0, 0.0, 1.0], dtype=jnp.float64), batch + (1, 4))
    return jnp.concatenate([top, bottom], axis=-2)


def multiply(T_ab: Array, T_bc: Array) -> Array:
    """T_ab @ T_bc, i.e. frame c expressed in frame a."""
    return jnp.matmul(T_ab, T_bc)


def inverse(T: Array) -> Array:
    """
    Invert a rigid transform without a general matrix inverse.

    [[R, t], [0, 1]]^-1 = [[R^T, -R^T t], [0, 1]]
    """
    R_t = so3.inverse(get_rotation(T))
    return from_position_and_rotation(-so3.apply(R_t, get_position(T)), R_t)


def apply(T: Array, points: Array) -> Array:
    """
    Map points through a transform.

    Args:
        T: (..., 4, 4) transform
        points: (..., 3) single point or (..., N, 3) point set

    Returns:
        Transformed points with the shape of *points*
    """
    points = jnp.asarray(points, dtype=jnp.float64)
    return so3.apply(get_rotation(T), points) + (
        get_position(T) if points.ndim == T.ndim - 1 else get_position(T)[..., None, :]
    )


def get_position(T: Array) -> Array:
    return T[..., :3, 3]


def get_rotation(T: Array) -> Array:
    return T[..., :3, :3]
