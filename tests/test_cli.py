"""Tests for the command line interface."""

import pytest
import yaml
from typer.testing import CliRunner

from clocktrain.cli import app

runner = CliRunner()


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "train.yaml"
    path.write_text(yaml.safe_dump({
        "name": "cli_train",
        "module": 1.0,
        "initial_angle": 60.0,
        "span_length": 72.0,
        "teeth": {"t1": 8, "T2": 64, "t2": 8, "T3": 64, "t3": 8, "T4": 64},
    }))
    return path


class TestValidate:
    """Tests for the validate command."""

    def test_prints_layout(self, spec_file):
        result = runner.invoke(app, ["validate", str(spec_file)])

        assert result.exit_code == 0
        assert "Specification valid: cli_train" in result.output
        assert "Node 1: (0.000, 0.000)  wheel -" in result.output
        assert "Node 3: (54.000, 31.177)" in result.output
        assert "Node 4: (72.000, 0.000)  wheel 30.00  pinion -" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1

    def test_unreachable_layout(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({
            "name": "bad",
            "module": 1.0,
            "initial_angle": 0.0,
            "span_length": 36.0,
            "teeth": {"t1": 8, "T2": 64, "t2": 8, "T3": 64, "t3": 8, "T4": 64},
        }))
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1

    def test_invalid_spec(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"name": "bad", "module": -1.0}))
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1


class TestProfile:
    """Tests for the profile command."""

    def test_driving_wheel(self):
        result = runner.invoke(app, ["profile", "50", "--mate", "10"])
        assert result.exit_code == 0
        assert "addendum factor:  1.5540" in result.output
        assert "radius factor:    2.2900" in result.output
        assert "pitch diameter:   50.000" in result.output

    def test_driving_wheel_needs_mate(self):
        result = runner.invoke(app, ["profile", "50"])
        assert result.exit_code == 1

    def test_driven_pinion_family(self):
        result = runner.invoke(app, ["profile", "8", "--role", "driven-pinion", "--family", "C"])
        assert result.exit_code == 0
        assert "addendum factor:  0.8550" in result.output

    def test_sometimes_driven(self):
        result = runner.invoke(app, ["profile", "12", "--role", "sometimes-driven", "--module", "0.5"])
        assert result.exit_code == 0
        assert "thickness factor: 1.4100" in result.output
        assert "pitch diameter:   6.000" in result.output

    def test_unknown_family(self):
        result = runner.invoke(app, ["profile", "8", "--role", "driven-pinion", "--family", "Z"])
        assert result.exit_code == 1
