"""Test the option schemas each primitive declares.

Run: uv run pytest tests/test_params.py
"""

import logging

import numpy as np
import pytest
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from primitives import Clipper, Hysteresis, Lowpass, Scaler, ScaleType
from primitives.params import ParamDef, ParamSchema, ParamType


def test_defaults_match_constructors():
    for cls in [Clipper, Lowpass, Hysteresis, Scaler]:
        assert cls().params() == cls.schema.default_params(), cls.__name__


def test_schema_keys():
    assert Clipper.schema.keys() == ["min", "max"]
    assert Lowpass.schema.keys() == ["sample_rate", "lowpass_frequency"]
    assert Hysteresis.schema.keys() == [
        "sample_rate", "lowpass_frequency_up", "lowpass_frequency_down"]
    assert len(Scaler.schema) == 7
    assert Scaler.schema.get("type").default is ScaleType.LINEAR
    assert Scaler.schema.get("nope") is None


def test_param_ranges():
    assert Scaler.schema.param_ranges() == {"base": (0.0, np.inf)}
    assert Lowpass.schema.param_ranges() == {}


def test_validate_casts():
    schema = ParamSchema([
        ParamDef("gain", ParamType.FLOAT, 1.0, range=(0.0, 2.0)),
        ParamDef("on", ParamType.BOOL, False),
    ])
    assert schema.validate({"gain": "1.5", "on": 1}) == {"gain": 1.5, "on": True}
    assert schema.validate({"gain": 7}) == {"gain": 2.0}
    assert schema.validate({"gain": -7}) == {"gain": 0.0}
    assert np.isnan(schema.validate({"gain": np.nan})["gain"])
    assert schema.validate({}) == {}


def test_validate_rejects():
    with pytest.raises(TypeError):
        Lowpass.schema.validate({"sampleRate": 44100})
    with pytest.raises(ValueError):
        Lowpass.schema.validate({"sample_rate": None})
    with pytest.raises(ValueError):
        Scaler.schema.validate({"type": "quadratic"})


def test_clamp_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="primitives.params"):
        Scaler(base=-1)
    assert "base=-1.0 clamped to 0.0" in caplog.text


def test_int_values_become_floats():
    lowpass = Lowpass(sample_rate=44100, lowpass_frequency=100)
    assert isinstance(lowpass.sample_rate, float)
    assert isinstance(lowpass.lowpass_frequency, float)


def test_errors_name_the_option():
    with pytest.raises(ValueError, match=r"Cutoff \(lowpass_frequency\)"):
        Lowpass().set(lowpass_frequency="fast")
    with pytest.raises(ValueError, match=r"Curve \(type\)"):
        Scaler(type="cubic")
    with pytest.raises(ValueError, match=r"^gain expects a number"):
        ParamSchema([ParamDef("gain", ParamType.FLOAT, 1.0)]).validate({"gain": "x"})


def test_schema_iterates_in_declaration_order():
    labels = [p.label for p in Hysteresis.schema]
    assert labels == ["Sample rate (Hz, 2 = normalised)",
                      "Cutoff rising", "Cutoff falling"]
