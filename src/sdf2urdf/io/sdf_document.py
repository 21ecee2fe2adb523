"""SDF document loading and navigation.

This module wraps lxml elements in :class:`SdfElement`, the read-only
navigation interface the converters use: existence checks, first child /
next same-tag sibling lookup, lazy same-tag iteration and typed value
extraction with defaults.
"""

import logging
import math
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, NamedTuple, Optional, Union

from lxml import etree

from sdf2urdf.errors import DocumentError, InvalidValueError, MissingModelError, MissingValueError
from sdf2urdf.transforms import Pose

logger = logging.getLogger(__name__)

# Sentinel for "no default supplied"
REQUIRED = object()


class Vector3(NamedTuple):
    x: float
    y: float
    z: float


def _split_floats(text: str, count: int) -> list:
    values = [float(v) for v in text.split()]
    if len(values) != count:
        raise ValueError(f"expected {count} numbers, got {len(values)}")
    return values


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _parse_int(text: str) -> int:
    return int(text.strip())


_PARSERS: Dict[Any, Callable[[str], Any]] = {
    str: lambda text: text.strip(),
    float: lambda text: float(text.strip()),
    int: _parse_int,
    bool: _parse_bool,
    Vector3: lambda text: Vector3(*_split_floats(text, 3)),
    Pose: lambda text: Pose.from_values(_split_floats(text, 6)),
}


class SdfElement:
    """Read-only view over one SDF element.

    Attribute values take precedence over child elements of the same name,
    so ``get("name")`` reads ``<link name='...'>`` and ``get("mass", float)``
    reads ``<mass>1.0</mass>``.
    """

    def __init__(self, element: etree._Element, placeholder: bool = False):
        self._element = element
        self.placeholder = placeholder

    def __repr__(self) -> str:
        return f"SdfElement({self.describe()})"

    @property
    def tag(self) -> str:
        return self._element.tag

    def describe(self) -> str:
        """Short label for messages, e.g. ``link 'base'``."""
        name = self._element.get("name")
        return f"{self.tag} '{name}'" if name else self.tag

    # Navigation
    def has_child(self, tag: str) -> bool:
        return self._element.find(tag) is not None

    def first_child(self, tag: str) -> Optional["SdfElement"]:
        child = self._element.find(tag)
        return SdfElement(child) if child is not None else None

    def next_sibling(self, tag: str) -> Optional["SdfElement"]:
        """Next sibling with the same *tag* in document order, or None."""
        sibling = next(self._element.itersiblings(tag), None)
        return SdfElement(sibling) if sibling is not None else None

    def children(self, tag: str) -> Iterator["SdfElement"]:
        """Lazily yield every child with *tag* in document order."""
        child = self.first_child(tag)
        while child is not None:
            yield child
            child = child.next_sibling(tag)

    def all_children(self) -> Iterator["SdfElement"]:
        for child in self._element.iterchildren(tag=etree.Element):
            yield SdfElement(child)

    def element(self, tag: str) -> "SdfElement":
        """Child with *tag*, or an empty placeholder so value defaults apply."""
        child = self.first_child(tag)
        if child is None:
            return SdfElement(etree.Element(tag), placeholder=True)
        return child

    # Values
    def has(self, name: str) -> bool:
        return name in self._element.attrib or self.has_child(name)

    def get(self, name: str, kind: Any = str, default: Any = REQUIRED) -> Any:
        """Typed value of attribute or child element *name*.

        Args:
            name: Attribute or child element name
            kind: One of str, float, int, bool, Vector3 or Pose
            default: Returned when the value is absent

        Raises:
            MissingValueError: If the value is absent and no default was given
            InvalidValueError: If the value cannot be parsed as *kind*
        """
        text = self._element.get(name)
        source = self._element
        if text is None:
            source = self._element.find(name)
            text = source.text if source is not None else None

        if text is None or (not text.strip() and kind is not str):
            if default is REQUIRED:
                raise MissingValueError(self.tag, name)
            return default

        value = self._parse(name, text, kind)
        if kind is Pose and source is not self._element:
            value = self._apply_degrees(source, value)
        return value

    def value(self, kind: Any = str, default: Any = REQUIRED) -> Any:
        """Typed value of this element's own text."""
        text = self._element.text
        if text is None or not text.strip():
            if default is REQUIRED:
                raise MissingValueError(self.tag, "text")
            return default

        value = self._parse(self.tag, text, kind)
        if kind is Pose:
            value = self._apply_degrees(self._element, value)
        return value

    def _parse(self, name: str, text: str, kind: Any) -> Any:
        try:
            parser = _PARSERS[kind]
        except KeyError:
            raise TypeError(f"Unsupported value kind: {kind!r}") from None
        try:
            return parser(text)
        except ValueError as e:
            raise InvalidValueError(self.tag, name, text, getattr(kind, "__name__", str(kind))) from e

    @staticmethod
    def _apply_degrees(source: etree._Element, pose: Pose) -> Pose:
        # <pose degrees='true'> stores rpy in degrees
        if source.get("degrees", "false").strip().lower() != "true":
            return pose
        x, y, z, roll, pitch, yaw = pose.values()
        return Pose.from_values([x, y, z, math.radians(roll), math.radians(pitch), math.radians(yaw)])


def parse_sdf(text: Union[str, bytes]) -> SdfElement:
    """Parse SDF text into its root element.

    Raises:
        DocumentError: If the text is not well-formed XML
    """
    if isinstance(text, str):
        text = text.encode("utf-8")
    parser = etree.XMLParser(remove_comments=True)
    try:
        root = etree.fromstring(text, parser)
    except etree.XMLSyntaxError as e:
        raise DocumentError(f"SDF parsing the xml failed: {e}") from e
    return SdfElement(root)


def load_sdf(sdf_path: Union[str, Path]) -> SdfElement:
    """Load an SDF file and return its root element.

    Args:
        sdf_path: Path to the SDF file to load.

    Raises:
        DocumentError: If the file does not exist or cannot be parsed
    """
    path = Path(sdf_path)
    if not path.is_file():
        raise DocumentError(f"File doesn't exist [{path}]")

    parser = etree.XMLParser(remove_comments=True)
    try:
        tree = etree.parse(str(path), parser)
    except etree.XMLSyntaxError as e:
        raise DocumentError(f"SDF parsing the xml failed for {path}: {e}") from e
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e}") from e

    logger.debug("Loaded %s", path)
    return SdfElement(tree.getroot())


def find_model(root: SdfElement) -> SdfElement:
    """Locate the model element to convert.

    Raises:
        MissingModelError: If the document has no model element
    """
    if root.tag == "model":
        return root
    model = root.first_child("model")
    if model is None:
        raise MissingModelError(f"No <model> element under <{root.tag}>")
    return model
