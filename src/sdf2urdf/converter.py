"""Structural conversion of an SDF model into a URDF robot.

This module implements the heart of sdf2urdf: the traversal that turns a
model's links, sensors and joints into URDF blocks, and the joint pose
reparenting from SDF's child-link convention to URDF's parent-link one.

The traversal is always ``robot open -> every link -> every joint ->
robot close``. Joints are reparented against link poses collected in a
:class:`LinkPoseRegistry`, so all links are visited first no matter where
the joints sit in the document.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from sdf2urdf.config import ConversionOptions
from sdf2urdf.core import Block, ConversionIssue, ConversionResult, LinkPoseRegistry, Severity
from sdf2urdf.errors import MissingLinkError
from sdf2urdf.io import XML_HEADER, SdfElement, UrdfFormatter, find_model, load_sdf, parse_sdf
from sdf2urdf.leaf import (
    convert_axis,
    convert_collision,
    convert_inertial,
    convert_sensor,
    convert_visual,
)
from sdf2urdf.transforms import Pose, child_to_parent_frame

logger = logging.getLogger(__name__)

# SDF joints may attach to the world frame, which coincides with the model frame here
WORLD_FRAME = "world"


def convert_link(elem: SdfElement, prefix: str, registry: LinkPoseRegistry,
                 fmt: UrdfFormatter) -> Block:
    """Convert one ``<link>`` and register its model-frame pose.

    Emits the inertial block, then every collision and every visual in
    document order. Sensors are converted by the caller.
    """
    name = elem.get("name")
    registry.register(name, elem.get("pose", Pose, Pose.identity()))
    logger.debug("Converting link '%s'", name)

    inner = fmt.indent(prefix)
    parts: List[Block] = [convert_inertial(elem.element("inertial"), inner, fmt)]
    parts.extend(convert_collision(c, inner, fmt) for c in elem.children("collision"))
    parts.extend(convert_visual(v, inner, fmt) for v in elem.children("visual"))

    head = f"{prefix}<link name='{fmt.attr(name)}'>\n"
    return Block.join(parts, head, f"{prefix}</link>\n")


def _frame_pose(name: str, joint_name: str, registry: LinkPoseRegistry,
                model_frame: Pose) -> Pose:
    if name == WORLD_FRAME and name not in registry:
        return model_frame
    return registry.lookup(name, joint_name)


def convert_joint(elem: SdfElement, prefix: str, registry: LinkPoseRegistry,
                  fmt: UrdfFormatter, model_frame: Optional[Pose] = None) -> Block:
    """Convert one ``<joint>``, moving its pose into the parent link frame.

    SDF declares a joint pose in its child link's frame; URDF wants it in
    the parent link's frame. The pose is promoted to the model frame through
    the child link pose, then reparented onto the parent link pose.

    Raises:
        MissingLinkError: If the parent or child link was never registered
    """
    if model_frame is None:
        model_frame = Pose.identity()

    name = elem.get("name")
    joint_type = elem.get("type")
    child = elem.get("child")
    parent = elem.get("parent")

    child_pose = _frame_pose(child, name, registry, model_frame)
    parent_pose = _frame_pose(parent, name, registry, model_frame)
    joint_pose = elem.get("pose", Pose, Pose.identity())

    origin = child_to_parent_frame(joint_pose, child_pose, parent_pose, model_frame)
    logger.debug("Joint '%s': %s -> %s", name, parent, child)

    inner = fmt.indent(prefix)
    axis = convert_axis(elem.element("axis"), inner, fmt)
    text = (
        f"{prefix}<joint name='{fmt.attr(name)}' type='{fmt.attr(joint_type)}'>\n"
        f"{fmt.origin(origin, inner)}"
        f"{inner}<parent link='{fmt.attr(parent)}'/>\n"
        f"{inner}<child link='{fmt.attr(child)}'/>\n"
        f"{axis.text}"
        f"{prefix}</joint>\n"
    )
    return Block(text, complete=axis.complete, issues=axis.issues)


def convert_model(elem: SdfElement, options: Optional[ConversionOptions] = None) -> Block:
    """Convert a ``<model>`` into a ``<robot>`` block.

    Every link (followed by its sensors) is converted before any joint. A
    joint naming an unknown link is dropped with an error issue, or raises
    when ``options.strict`` is set.

    Raises:
        MissingLinkError: In strict mode, for a joint naming an unknown link
    """
    options = options or ConversionOptions()
    fmt = UrdfFormatter(options)
    prefix = options.indent
    registry = LinkPoseRegistry()
    model_frame = Pose.identity()
    head = f"<robot name='{fmt.attr(elem.get('name'))}'>\n"

    blocks: List[Block] = []
    for link in elem.children("link"):
        blocks.append(convert_link(link, prefix, registry, fmt))
        link_name = link.get("name")
        blocks.extend(convert_sensor(s, prefix, link_name, fmt) for s in link.children("sensor"))
    logger.debug("Registered %d link pose(s)", len(registry))

    for joint in elem.children("joint"):
        try:
            blocks.append(convert_joint(joint, prefix, registry, fmt, model_frame))
        except MissingLinkError as e:
            if options.strict:
                raise
            logger.error("Skipping %s: %s", joint.describe(), e)
            blocks.append(Block("", complete=False,
                                issues=(ConversionIssue(Severity.ERROR, joint.describe(), str(e)),)))

    return Block.join(blocks, head, "</robot>\n")


def convert_document(root: SdfElement, options: Optional[ConversionOptions] = None) -> ConversionResult:
    """Convert a parsed SDF document into URDF text.

    Args:
        root: Root element of the SDF document
        options: Conversion options, defaults when omitted

    Returns:
        ConversionResult holding the URDF text and any block-local issues

    Raises:
        MissingModelError: If the document has no model element
    """
    model = find_model(root)
    block = convert_model(model, options)
    result = ConversionResult(XML_HEADER + block.text, model.get("name"), block.issues)

    logger.info("Converted model '%s' with %d warning(s) and %d error(s)",
                result.model_name, len(result.warnings), len(result.errors))
    return result


def convert_string(text: Union[str, bytes], options: Optional[ConversionOptions] = None) -> ConversionResult:
    """Parse and convert SDF text."""
    return convert_document(parse_sdf(text), options)


def convert_file(sdf_path: Union[str, Path], options: Optional[ConversionOptions] = None) -> ConversionResult:
    """Load and convert an SDF file.

    Raises:
        DocumentError: If the file does not exist or cannot be parsed
        MissingModelError: If the document has no model element
    """
    return convert_document(load_sdf(sdf_path), options)
