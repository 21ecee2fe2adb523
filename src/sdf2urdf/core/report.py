"""Result types shared by the leaf and structural converters.

Every converter hands back an owned :class:`Block` of URDF text instead of
writing into a shared buffer. Geometry and sensor blocks also carry the
variant arm they took, so callers can see an unrecognized geometry or an
unsupported sensor instead of finding an empty block.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Tuple, Union


class GeometryKind(enum.Enum):
    BOX = "box"
    SPHERE = "sphere"
    CYLINDER = "cylinder"
    MESH = "mesh"
    UNRECOGNIZED = "unrecognized"


class SensorKind(enum.Enum):
    CAMERA = "camera"
    RAY = "ray"
    UNSUPPORTED = "unsupported"


class Severity(enum.Enum):
    WARNING = "warning"
    ERROR = "error"


BlockKind = Union[GeometryKind, SensorKind, None]

# Probe order for geometry; the first tag present wins.
GEOMETRY_KINDS: Tuple[GeometryKind, ...] = (
    GeometryKind.BOX,
    GeometryKind.SPHERE,
    GeometryKind.CYLINDER,
    GeometryKind.MESH,
)


@dataclass(frozen=True)
class ConversionIssue:
    """A block-local problem found during conversion."""
    severity: Severity
    element: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.element}: {self.message}"


@dataclass(frozen=True)
class Block:
    """One converted output block.

    Attributes:
        text: URDF text, possibly empty
        kind: Variant arm taken for geometry and sensor blocks
        complete: False when a required sub-element was absent
        issues: Problems found while building this block or its children
    """
    text: str
    kind: BlockKind = None
    complete: bool = True
    issues: Tuple[ConversionIssue, ...] = ()

    @classmethod
    def join(cls, parts: List["Block"], head: str = "", tail: str = "",
             kind: BlockKind = None) -> "Block":
        """Wrap child blocks between *head* and *tail*, merging their issues."""
        issues: Tuple[ConversionIssue, ...] = ()
        for part in parts:
            issues += part.issues
        text = head + "".join(part.text for part in parts) + tail
        return cls(text, kind, all(part.complete for part in parts), issues)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one whole-document conversion."""
    urdf: str
    model_name: str
    issues: Tuple[ConversionIssue, ...] = field(default_factory=tuple)

    @property
    def errors(self) -> Tuple[ConversionIssue, ...]:
        return tuple(i for i in self.issues if i.severity is Severity.ERROR)

    @property
    def warnings(self) -> Tuple[ConversionIssue, ...]:
        return tuple(i for i in self.issues if i.severity is Severity.WARNING)

    def __str__(self) -> str:
        return self.urdf
