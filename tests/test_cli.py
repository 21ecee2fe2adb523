"""Tests for the command line front-end."""

import logging

from sdf2urdf.cli import build_parser, main


def test_parser_flags():
    args = build_parser().parse_args(["-f", "in.sdf", "-o", "out.urdf", "--strict", "--precision", "8"])

    assert args.file == "in.sdf"
    assert args.out == "out.urdf"
    assert args.strict is True
    assert args.precision == 8
    assert args.config is None


def test_writes_output_file(arm_sdf_path, fixtures_dir, tmp_path):
    out = tmp_path / "arm.urdf"

    assert main(["-f", str(arm_sdf_path), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == (fixtures_dir / "arm.urdf").read_text(encoding="utf-8")


def test_writes_stdout_without_out(arm_sdf_path, capsys):
    assert main(["--file", str(arm_sdf_path)]) == 0

    captured = capsys.readouterr()
    assert captured.out.startswith("<?xml version='1.0' encoding='utf-8'?>\n<robot name='arm'>")


def test_requires_file(caplog):
    with caplog.at_level(logging.ERROR):
        assert main([]) == 1
    assert "-f" in caplog.text


def test_missing_input_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert main(["-f", str(tmp_path / "nope.sdf")]) == 1
    assert "Unable to convert file" in caplog.text


def test_model_less_input(fixtures_dir):
    assert main(["-f", str(fixtures_dir / "no_model.sdf")]) == 1


def test_config_file_sets_precision(tmp_path, capsys):
    sdf = tmp_path / "m.sdf"
    sdf.write_text("<sdf><model name='m'><link name='a'><pose>0.123456789 0 0 0 0 0</pose>"
                   "<inertial><pose>0.123456789 0 0 0 0 0</pose></inertial></link></model></sdf>")
    config = tmp_path / "options.yaml"
    config.write_text("precision: 3\nindent: \"    \"\n")

    assert main(["-f", str(sdf), "--config", str(config)]) == 0
    out = capsys.readouterr().out
    assert "\n    <link name='a'>\n" in out
    assert "xyz='0.123 0 0'" in out


def test_precision_flag_overrides_config(tmp_path, capsys):
    sdf = tmp_path / "m.sdf"
    sdf.write_text("<sdf><model name='m'><link name='a'>"
                   "<inertial><mass>1.23456789</mass></inertial></link></model></sdf>")
    config = tmp_path / "options.yaml"
    config.write_text("precision: 3\n")

    assert main(["-f", str(sdf), "--config", str(config), "--precision", "5"]) == 0
    assert "<mass value='1.2346'/>" in capsys.readouterr().out


def test_invalid_config(tmp_path, arm_sdf_path):
    config = tmp_path / "options.yaml"
    config.write_text("colour: blue\n")

    assert main(["-f", str(arm_sdf_path), "--config", str(config)]) == 1


def test_strict_flag(tmp_path):
    sdf = tmp_path / "m.sdf"
    sdf.write_text("<sdf><model name='m'><link name='a'/>"
                   "<joint name='j' type='fixed'><parent>a</parent><child>ghost</child></joint>"
                   "</model></sdf>")

    assert main(["-f", str(sdf)]) == 0
    assert main(["-f", str(sdf), "--strict"]) == 1


def test_unwritable_output(arm_sdf_path, tmp_path):
    out = tmp_path / "missing_dir" / "arm.urdf"
    assert main(["-f", str(arm_sdf_path), "-o", str(out)]) == 1
