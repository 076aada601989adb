"""
test_cli.py
-----------
Tests for the `python -m roughstroke` entry point.
"""

import json

from roughstroke.__main__ import main


def test_cli_prints_opset(capsys, reset_package_logger):
    assert main(["M0 0 L10 0", "--seed", "3"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["seed"] == 3
    assert out["type"] == "path"
    assert [op["op"] for op in out["ops"]] == ["move", "curve", "curve"]


def test_cli_reports_entropy_seed(capsys, reset_package_logger):
    assert main(["M0 0 L10 0"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["seed"] != 0


def test_cli_rejects_bad_options(capsys, reset_package_logger):
    assert main(["M0 0 L10 0", "--roughness", "-1"]) == 2
    assert capsys.readouterr().out == ""


def test_cli_writes_preview(tmp_path, capsys, reset_package_logger):
    png = tmp_path / "preview.png"
    assert main(["M0 0 L10 0 L10 10 Z", "--seed", "1", "--png", str(png)]) == 0
    assert png.exists() and png.stat().st_size > 0
