"""Tests for VariableEnvironment."""
import math

import pytest

from scalablelayout import VariableEnvironment


class TestForContainer:
    """Tests for the base bindings."""

    def test_base_variables(self):
        env = VariableEnvironment.for_container(200, 100)
        assert env["centerx"] == 100.0
        assert env["centery"] == 50.0
        assert env["width"] == 200.0
        assert env["height"] == 100.0
        assert env["pi"] == math.pi
        assert env["e"] == math.e
        assert len(env) == 6

    def test_extended_variables_absent(self):
        env = VariableEnvironment.for_container(200, 100)
        for name in ("CENTERX", "CENTERY", "WIDTH", "HEIGHT"):
            assert name not in env

    def test_read_only(self):
        env = VariableEnvironment.for_container(10, 10)
        with pytest.raises(TypeError):
            env["width"] = 1


class TestWithComponent:
    """Tests for deriving the position bindings."""

    def test_extended_variables(self):
        env = VariableEnvironment.for_container(200, 100).with_component(50, 20)
        assert env["CENTERX"] == 75.0
        assert env["CENTERY"] == 40.0
        assert env["WIDTH"] == 50.0
        assert env["HEIGHT"] == 20.0
        assert env["width"] == 200.0

    def test_original_unchanged(self):
        base = VariableEnvironment.for_container(200, 100)
        base.with_component(50, 20)
        assert "WIDTH" not in base

    def test_single_axis(self):
        env = VariableEnvironment.for_container(200, 100).with_component(width=50)
        assert env["CENTERX"] == 75.0
        assert "CENTERY" not in env
        assert "HEIGHT" not in env
