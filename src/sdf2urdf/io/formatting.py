"""Text rendering helpers for URDF output."""

from typing import Iterable
from xml.sax.saxutils import escape

from sdf2urdf.config import ConversionOptions
from sdf2urdf.transforms import Pose

XML_HEADER = "<?xml version='1.0' encoding='utf-8'?>\n"


class UrdfFormatter:
    """Renders numbers, vectors, attributes and origins with the active options.

    Numbers print with ``precision`` significant digits, like a default C++
    output stream, and values closer to zero than ``zero_tolerance`` print
    as ``0`` so that round-off from rotations does not leak into the output.
    """

    def __init__(self, options: ConversionOptions = ConversionOptions()):
        self.options = options

    def indent(self, prefix: str) -> str:
        return prefix + self.options.indent

    def number(self, value: float) -> str:
        value = float(value)
        if abs(value) < self.options.zero_tolerance:
            value = 0.0
        # + 0.0 turns -0.0 into 0.0
        return f"{value + 0.0:.{self.options.precision}g}"

    def vector(self, values: Iterable[float]) -> str:
        return " ".join(self.number(v) for v in values)

    @staticmethod
    def attr(value: object) -> str:
        return escape(str(value), {"'": "&apos;"})

    def origin(self, pose: Pose, prefix: str) -> str:
        values = pose.values()
        return (f"{prefix}<origin xyz='{self.vector(values[:3])}' "
                f"rpy='{self.vector(values[3:])}'/>\n")
