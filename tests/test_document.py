"""Tests for SDF loading and the navigation interface."""

import math

import numpy as np
import pytest

from sdf2urdf.errors import DocumentError, InvalidValueError, MissingModelError, MissingValueError
from sdf2urdf.io import SdfElement, Vector3, find_model, load_sdf, parse_sdf
from sdf2urdf.transforms import Pose

from conftest import element


LINK = """
<link name='base'>
  <pose>1 2 3 0 0 0.5</pose>
  <collision name='c1'/>
  <visual name='v1'/>
  <collision name='c2'/>
  <collision name='c3'/>
  <visual name='v2'/>
</link>
"""


def test_load_arm_sdf(arm_sdf_path):
    """Test loading the arm fixture and walking to its model."""
    root = load_sdf(arm_sdf_path)

    assert isinstance(root, SdfElement)
    assert root.tag == "sdf"

    model = find_model(root)
    assert model.get("name") == "arm"
    assert [link.get("name") for link in model.children("link")] == ["base_link", "upper_arm"]
    assert [joint.get("name") for joint in model.children("joint")] == ["shoulder"]


def test_load_missing_file(tmp_path):
    with pytest.raises(DocumentError, match="doesn't exist"):
        load_sdf(tmp_path / "missing.sdf")


def test_load_malformed_file(fixtures_dir):
    with pytest.raises(DocumentError):
        load_sdf(fixtures_dir / "malformed.sdf")


def test_parse_malformed_text():
    with pytest.raises(DocumentError):
        parse_sdf("<sdf><model name='x'></sdf>")


def test_find_model_missing(fixtures_dir):
    with pytest.raises(MissingModelError):
        find_model(load_sdf(fixtures_dir / "no_model.sdf"))


def test_find_model_accepts_model_root():
    model = element("<model name='bare'/>")
    assert find_model(model).get("name") == "bare"


def test_has_child_and_first_child():
    link = element(LINK)

    assert link.has_child("collision")
    assert not link.has_child("inertial")
    assert link.first_child("collision").get("name") == "c1"
    assert link.first_child("inertial") is None


def test_next_sibling_skips_other_tags():
    """Test same-tag sibling iteration ignores interleaved elements."""
    link = element(LINK)

    first = link.first_child("collision")
    second = first.next_sibling("collision")
    third = second.next_sibling("collision")

    assert [first.get("name"), second.get("name"), third.get("name")] == ["c1", "c2", "c3"]
    assert third.next_sibling("collision") is None


def test_children_in_document_order_and_restartable():
    link = element(LINK)

    assert [v.get("name") for v in link.children("visual")] == ["v1", "v2"]
    # A second pass yields the same sequence
    assert [v.get("name") for v in link.children("visual")] == ["v1", "v2"]
    assert list(link.children("sensor")) == []


def test_get_reads_attribute_then_child():
    joint = element("<joint name='j' type='revolute'><parent>a</parent><child>b</child></joint>")

    assert joint.get("name") == "j"
    assert joint.get("type") == "revolute"
    assert joint.get("parent") == "a"
    assert joint.get("child") == "b"


def test_get_typed_values():
    elem = element(
        "<e><mass> 2.5 </mass><samples>640</samples><size>1 2 3</size>"
        "<pose>1 2 3 0.1 0.2 0.3</pose><flag>true</flag></e>"
    )

    assert elem.get("mass", float) == 2.5
    assert elem.get("samples", int) == 640
    assert elem.get("size", Vector3) == Vector3(1.0, 2.0, 3.0)
    assert elem.get("flag", bool) is True
    np.testing.assert_allclose(elem.get("pose", Pose).values(), [1, 2, 3, 0.1, 0.2, 0.3])


def test_get_default_and_missing():
    elem = element("<inertial/>")

    assert elem.get("mass", float, 1.0) == 1.0
    with pytest.raises(MissingValueError, match="mass"):
        elem.get("mass", float)


def test_get_empty_numeric_uses_default():
    elem = element("<e><mass></mass></e>")
    assert elem.get("mass", float, 3.0) == 3.0


def test_get_invalid_value():
    elem = element("<e><mass>heavy</mass><size>1 2</size></e>")

    with pytest.raises(InvalidValueError):
        elem.get("mass", float)
    with pytest.raises(InvalidValueError):
        elem.get("size", Vector3)


def test_pose_in_degrees():
    elem = element("<e><pose degrees='true'>1 0 0 0 90 180</pose></e>")
    values = elem.get("pose", Pose).values()
    np.testing.assert_allclose(values, [1, 0, 0, 0, math.pi / 2, math.pi], atol=1e-12)


def test_value_reads_own_text():
    pose = element("<pose>0 0 1 0 0 0</pose>")
    np.testing.assert_allclose(pose.value(Pose).values(), [0, 0, 1, 0, 0, 0])
    assert element("<pose/>").value(Pose, default=None) is None


def test_element_placeholder_applies_defaults():
    link = element("<link name='l'/>")
    inertial = link.element("inertial")

    assert inertial.placeholder
    assert inertial.tag == "inertial"
    assert inertial.get("mass", float, 1.0) == 1.0
    assert not link.has_child("inertial")


def test_all_children():
    geometry = element("<geometry><plane/><heightmap/></geometry>")
    assert [child.tag for child in geometry.all_children()] == ["plane", "heightmap"]
