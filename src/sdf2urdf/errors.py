"""
Exceptions raised by the SDF to URDF converter.

Block-local problems (a camera without a clip, a visual without a known
geometry) never raise; they are recorded as issues on the conversion
result. The exceptions below are for failures the caller has to handle.
"""

from typing import Optional


class Sdf2UrdfError(Exception):
    """Base exception for the converter."""
    pass


class DocumentError(Sdf2UrdfError):
    """Raised when the source file is missing or is not well-formed XML."""
    pass


class MissingModelError(Sdf2UrdfError):
    """Raised when the document has no model element to convert."""
    pass


class MissingValueError(Sdf2UrdfError):
    """Raised when a required attribute or child value is absent and has no default."""

    def __init__(self, element: str, name: str):
        self.element = element
        self.name = name
        super().__init__(f"<{element}> has no '{name}' value")


class InvalidValueError(Sdf2UrdfError):
    """Raised when a value is present but cannot be parsed as the requested type."""

    def __init__(self, element: str, name: str, text: str, kind: str):
        self.element = element
        self.name = name
        self.text = text
        super().__init__(f"<{element}> '{name}' value {text!r} is not a valid {kind}")


class MissingLinkError(Sdf2UrdfError):
    """Raised when a joint refers to a link that was never registered."""

    def __init__(self, link_name: str, joint_name: Optional[str] = None):
        self.link_name = link_name
        self.joint_name = joint_name
        where = f" (referenced by joint '{joint_name}')" if joint_name else ""
        super().__init__(f"Link '{link_name}' not found in model{where}")


class ConfigurationError(Sdf2UrdfError):
    """Raised for invalid conversion options."""
    pass
