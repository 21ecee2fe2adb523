"""Shared fixtures and helpers for the sdf2urdf tests."""

from pathlib import Path

import numpy as np
import pytest
from lxml import etree

from sdf2urdf.io import SdfElement, parse_sdf

FIXTURES = Path(__file__).parent / "fixtures"


def element(xml: str) -> SdfElement:
    """Parse an XML fragment into an SdfElement."""
    return parse_sdf(xml)


def model_sdf(body: str, name: str = "test_model") -> str:
    """Wrap model children in an SDF document."""
    return f"<sdf version='1.6'><model name='{name}'>{body}</model></sdf>"


def urdf_tree(urdf: str) -> etree._Element:
    return etree.fromstring(urdf.encode("utf-8"))


def joint_origin(urdf: str, joint_name: str):
    """(xyz, rpy) arrays of a joint's origin in converted URDF text."""
    origin = urdf_tree(urdf).find(f"joint[@name='{joint_name}']/origin")
    assert origin is not None, f"joint '{joint_name}' not in output"
    xyz = np.array([float(v) for v in origin.get("xyz").split()])
    rpy = np.array([float(v) for v in origin.get("rpy").split()])
    return xyz, rpy


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def arm_sdf_path() -> Path:
    return FIXTURES / "arm.sdf"
