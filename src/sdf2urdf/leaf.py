"""Leaf converters: one SDF element kind in, one URDF block out.

Each converter reads a single element and returns an owned :class:`Block`.
None of them depends on sibling state. A missing required sub-element, or
a value that is absent or unparsable, degrades the block (empty or partial
text, ``complete=False``) and is reported as a warning issue; it never
aborts the document.

Optional values fall back to the SDF schema defaults.
"""

import functools
import logging
from typing import Any, Callable, List, Optional, TypeVar

from sdf2urdf.core import Block, ConversionIssue, GeometryKind, SensorKind, Severity
from sdf2urdf.core.report import GEOMETRY_KINDS, BlockKind
from sdf2urdf.errors import InvalidValueError, MissingValueError
from sdf2urdf.io import SdfElement, UrdfFormatter, Vector3
from sdf2urdf.transforms import Pose

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Block])

_DEFAULT_FORMATTER = UrdfFormatter()

# Errors a single bad value can raise while reading an element
VALUE_ERRORS = (MissingValueError, InvalidValueError)

# SDF schema defaults
INERTIA_COMPONENTS = ("ixx", "ixy", "ixz", "iyy", "iyz", "izz")
INERTIA_DEFAULTS = {"ixx": 1.0, "ixy": 0.0, "ixz": 0.0, "iyy": 1.0, "iyz": 0.0, "izz": 1.0}


def _warn(elem: SdfElement, message: str) -> ConversionIssue:
    logger.warning("%s: %s", elem.describe(), message)
    return ConversionIssue(Severity.WARNING, elem.describe(), message)


def _skipped(elem: SdfElement, error: Exception, kind: BlockKind = None) -> Block:
    return Block("", kind, complete=False, issues=(_warn(elem, f"{elem.tag} skipped: {error}"),))


def degrades_on_bad_value(kind: BlockKind = None) -> Callable[[F], F]:
    """
    Decorator for leaf converters whose element holds a bad value.

    A missing or unparsable value yields an empty, incomplete block of
    *kind* with a warning instead of propagating.

    Args:
        kind: Block kind reported on the skipped block

    Returns:
        Decorator applied to a converter taking the element first
    """
    def decorator(convert: F) -> F:
        @functools.wraps(convert)
        def wrapper(elem: SdfElement, *args: Any, **kwargs: Any) -> Block:
            try:
                return convert(elem, *args, **kwargs)
            except VALUE_ERRORS as e:
                return _skipped(elem, e, kind)

        return wrapper

    return decorator


@degrades_on_bad_value()
def convert_pose(elem: SdfElement, prefix: str,
                 fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    """``<pose>`` -> ``<origin xyz rpy/>``. An empty or absent pose is the identity."""
    pose = elem.value(Pose, default=Pose.identity())
    return Block(fmt.origin(pose, prefix))


def _convert_shape(elem: SdfElement, kind: GeometryKind, prefix: str, fmt: UrdfFormatter) -> str:
    shape = elem.element(kind.value)
    if kind is GeometryKind.BOX:
        return f"{prefix}<box size='{fmt.vector(shape.get('size', Vector3, Vector3(1.0, 1.0, 1.0)))}'/>\n"
    if kind is GeometryKind.SPHERE:
        return f"{prefix}<sphere radius='{fmt.number(shape.get('radius', float, 1.0))}'/>\n"
    if kind is GeometryKind.CYLINDER:
        return (f"{prefix}<cylinder radius='{fmt.number(shape.get('radius', float, 1.0))}' "
                f"length='{fmt.number(shape.get('length', float, 1.0))}'/>\n")
    scale = shape.get("scale", Vector3, Vector3(1.0, 1.0, 1.0))
    return (f"{prefix}<mesh filename='{fmt.attr(shape.get('uri'))}' "
            f"scale='{fmt.vector(scale)}'/>\n")


def convert_geometry(elem: SdfElement, prefix: str,
                     fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    """``<geometry>`` -> ``<geometry>`` holding the first recognized shape.

    Box, sphere, cylinder and mesh are probed in that order and the first
    one present wins. Without any of them the geometry block is empty and
    its kind is ``UNRECOGNIZED``. A recognized shape with a bad value (a
    mesh without ``uri``, say) also leaves the block empty but keeps its
    kind.
    """
    kind = next((k for k in GEOMETRY_KINDS if elem.has_child(k.value)), GeometryKind.UNRECOGNIZED)

    shape = ""
    issues = ()
    if kind is GeometryKind.UNRECOGNIZED:
        if elem.placeholder:
            detail = "no geometry element"
        else:
            present = [child.tag for child in elem.all_children()]
            detail = f"found {present}" if present else "no shape element"
        issues = (_warn(elem, f"no supported geometry ({detail})"),)
    else:
        try:
            shape = _convert_shape(elem, kind, fmt.indent(prefix), fmt)
        except VALUE_ERRORS as e:
            issues = (_warn(elem, f"{kind.value} dropped: {e}"),)

    text = f"{prefix}<geometry>\n{shape}{prefix}</geometry>\n"
    return Block(text, kind, not issues, issues)


@degrades_on_bad_value()
def _convert_shape_holder(elem: SdfElement, prefix: str, fmt: UrdfFormatter) -> Block:
    inner = fmt.indent(prefix)
    head = f"{prefix}<{elem.tag} name='{fmt.attr(elem.get('name'))}'>\n"
    parts = [
        convert_pose(elem.element("pose"), inner, fmt),
        convert_geometry(elem.element("geometry"), inner, fmt),
    ]
    return Block.join(parts, head, f"{prefix}</{elem.tag}>\n", kind=parts[1].kind)


def convert_collision(elem: SdfElement, prefix: str,
                      fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    return _convert_shape_holder(elem, prefix, fmt)


def convert_visual(elem: SdfElement, prefix: str,
                   fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    return _convert_shape_holder(elem, prefix, fmt)


@degrades_on_bad_value()
def convert_inertial(elem: SdfElement, prefix: str,
                     fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    """``<inertial>`` -> origin, mass and the six inertia components in fixed order."""
    inner = fmt.indent(prefix)
    inertia = elem.element("inertia")
    components = " ".join(
        f"{name}='{fmt.number(inertia.get(name, float, INERTIA_DEFAULTS[name]))}'"
        for name in INERTIA_COMPONENTS
    )
    mass = fmt.number(elem.get("mass", float, 1.0))
    pose = convert_pose(elem.element("pose"), inner, fmt)
    parts = [
        pose,
        Block(f"{inner}<mass value='{mass}'/>\n{inner}<inertia {components}/>\n"),
    ]
    return Block.join(parts, f"{prefix}<inertial>\n", f"{prefix}</inertial>\n")


@degrades_on_bad_value(SensorKind.CAMERA)
def convert_camera(elem: SdfElement, prefix: str,
                   fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    """``<camera>`` -> ``<camera><image .../></camera>``.

    Both ``image`` and ``clip`` are required; without either the block is
    empty and incomplete.
    """
    missing = [tag for tag in ("image", "clip") if not elem.has_child(tag)]
    if missing:
        issue = _warn(elem, f"camera skipped, missing {' and '.join(missing)}")
        return Block("", SensorKind.CAMERA, complete=False, issues=(issue,))

    image = elem.element("image")
    clip = elem.element("clip")
    inner = fmt.indent(prefix)
    text = (
        f"{prefix}<camera>\n"
        f"{inner}<image "
        f"width='{image.get('width', int, 320)}' "
        f"height='{image.get('height', int, 240)}' "
        f"format='{fmt.attr(image.get('format', str, 'R8G8B8'))}' "
        f"hfov='{fmt.number(elem.get('horizontal_fov', float, 1.047))}' "
        f"near='{fmt.number(clip.get('near', float, 0.1))}' "
        f"far='{fmt.number(clip.get('far', float, 100.0))}'/>\n"
        f"{prefix}</camera>\n"
    )
    return Block(text, SensorKind.CAMERA)


def _convert_scan(elem: SdfElement, prefix: str, fmt: UrdfFormatter) -> str:
    samples = elem.get("samples", int, 640 if elem.tag == "horizontal" else 1)
    return (
        f"{prefix}<{elem.tag} "
        f"samples='{samples}' "
        f"resolution='{fmt.number(elem.get('resolution', float, 1.0))}' "
        f"min_angle='{fmt.number(elem.get('min_angle', float, 0.0))}' "
        f"max_angle='{fmt.number(elem.get('max_angle', float, 0.0))}'/>\n"
    )


@degrades_on_bad_value(SensorKind.RAY)
def convert_ray(elem: SdfElement, prefix: str,
                fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    """``<ray>`` -> ``<ray>`` with horizontal and, if present, vertical scans."""
    if not elem.has_child("scan"):
        issue = _warn(elem, "ray skipped, missing scan")
        return Block("", SensorKind.RAY, complete=False, issues=(issue,))

    scan = elem.element("scan")
    inner = fmt.indent(prefix)
    lines = [f"{prefix}<ray>\n"]
    issues = ()

    horizontal = scan.first_child("horizontal")
    if horizontal is not None:
        lines.append(_convert_scan(horizontal, inner, fmt))
    else:
        issues = (_warn(scan, "ray scan has no horizontal block"),)

    vertical = scan.first_child("vertical")
    if vertical is not None:
        lines.append(_convert_scan(vertical, inner, fmt))

    lines.append(f"{prefix}</ray>\n")
    return Block("".join(lines), SensorKind.RAY, not issues, issues)


def convert_sensor(elem: SdfElement, prefix: str, parent_link: str,
                   fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    """``<sensor>`` -> ``<sensor>`` attached to *parent_link*.

    Camera and ray sensors get their specific content; any other kind
    yields a sensor block without it and the ``UNSUPPORTED`` kind. A sensor
    without a name, or with an unparsable update rate, is skipped.
    """
    if elem.has_child("camera"):
        kind = SensorKind.CAMERA
    elif elem.has_child("ray"):
        kind = SensorKind.RAY
    else:
        kind = SensorKind.UNSUPPORTED

    inner = fmt.indent(prefix)
    try:
        head = (f"{prefix}<sensor name='{fmt.attr(elem.get('name'))}' "
                f"update_rate='{fmt.number(elem.get('update_rate', float, 0.0))}'>\n"
                f"{inner}<parent link='{fmt.attr(parent_link)}'/>\n")
    except VALUE_ERRORS as e:
        return _skipped(elem, e, kind)

    parts: List[Block] = [convert_pose(elem.element("pose"), inner, fmt)]
    content: Optional[Block] = None
    if kind is SensorKind.CAMERA:
        content = convert_camera(elem.element("camera"), inner, fmt)
    elif kind is SensorKind.RAY:
        content = convert_ray(elem.element("ray"), inner, fmt)
    else:
        sensor_type = elem.get("type", str, "") or "untyped"
        content = Block("", kind, complete=False,
                        issues=(_warn(elem, f"unsupported sensor kind '{sensor_type}'"),))
    parts.append(content)

    return Block.join(parts, head, f"{prefix}</sensor>\n", kind=kind)


@degrades_on_bad_value()
def convert_axis(elem: SdfElement, prefix: str,
                 fmt: UrdfFormatter = _DEFAULT_FORMATTER) -> Block:
    """Joint ``<axis>`` -> optional ``<dynamics/>``, ``<axis/>`` and ``<limit/>``."""
    lines = []

    dynamics = elem.first_child("dynamics")
    if dynamics is not None:
        lines.append(f"{prefix}<dynamics "
                     f"damping='{fmt.number(dynamics.get('damping', float, 0.0))}' "
                     f"friction='{fmt.number(dynamics.get('friction', float, 0.0))}'/>\n")

    xyz = elem.get("xyz", Vector3, Vector3(0.0, 0.0, 1.0))
    lines.append(f"{prefix}<axis xyz='{fmt.vector(xyz)}'/>\n")

    limit = elem.element("limit")
    lines.append(f"{prefix}<limit "
                 f"lower='{fmt.number(limit.get('lower', float, -1e16))}' "
                 f"upper='{fmt.number(limit.get('upper', float, 1e16))}' "
                 f"effort='{fmt.number(limit.get('effort', float, -1.0))}' "
                 f"velocity='{fmt.number(limit.get('velocity', float, -1.0))}'/>\n")

    return Block("".join(lines))
