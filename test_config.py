"""Tests for defaults and environment resolution."""

import dataclasses
import logging

import pytest

from config import (
    DEFAULT_HEIGHT,
    DEFAULT_ROUTE,
    DEFAULT_TIME_ENABLED,
    DEFAULT_WIDTH,
    Configuration,
    Scale,
    from_environment,
    parse_scale,
)
from exceptions import ConfigurationError, MalformedScaleError


def test_defaults_without_environment():
    config = from_environment({})
    assert config == Configuration()
    assert config.address == "0.0.0.0"
    assert config.port == "8554"
    assert config.route == DEFAULT_ROUTE
    assert config.scale == Scale(DEFAULT_WIDTH, DEFAULT_HEIGHT)
    assert config.time is DEFAULT_TIME_ENABLED


def test_every_field_populated():
    config = from_environment({"RTSP_PORT": "9000", "RTSP_RESOLUTION": "bogus"})
    for f in dataclasses.fields(config):
        assert getattr(config, f.name) is not None


def test_environment_overrides():
    config = from_environment({
        "RTSP_ADDRESS": "127.0.0.1",
        "RTSP_PORT": "9554",
        "RTSP_USERNAME": "admin",
        "RTSP_PASSWORD": "secret",
        "RTSP_FRAMERATE": "15",
        "INPUT": "/dev/video0",
    })
    assert config.address == "127.0.0.1"
    assert config.port == "9554"
    assert config.username == "admin"
    assert config.password == "secret"
    assert config.framerate == "15"
    assert config.input == "/dev/video0"


def test_route_taken_verbatim():
    assert from_environment({"RTSP_ROUTE": "live"}).route == "live"


def test_empty_value_counts_as_present():
    assert from_environment({"RTSP_USERNAME": "", "RTSP_ADDRESS": ""}).address == ""


def test_resolution_parsed():
    assert from_environment({"RTSP_RESOLUTION": "640x480"}).scale == Scale("640", "480")


def test_resolution_splits_on_first_separator():
    assert from_environment({"RTSP_RESOLUTION": "1x2x3"}).scale == Scale("1", "2x3")
    assert from_environment({"RTSP_RESOLUTION": "x"}).scale == Scale("", "")


def test_malformed_resolution_keeps_default(caplog):
    with caplog.at_level(logging.WARNING):
        config = from_environment({"RTSP_RESOLUTION": "bogus"})
    assert config.scale == Scale(DEFAULT_WIDTH, DEFAULT_HEIGHT)
    assert "No x token found" in caplog.text
    assert "bogus" in caplog.text
    assert "Using default values" in caplog.text


@pytest.mark.parametrize("value, expected", [
    ("false", False),
    ("true", True),
    ("anything", True),
    ("", True),
    ("False", True),
])
def test_time_overlay(value, expected):
    assert from_environment({"ENABLE_TIME_OVERLAY": value}).time is expected


def test_time_overlay_unset_keeps_default():
    assert from_environment({}).time is DEFAULT_TIME_ENABLED


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("RTSP_PORT", "7000")
    monkeypatch.delenv("RTSP_RESOLUTION", raising=False)
    assert from_environment().port == "7000"


def test_parse_scale_errors():
    with pytest.raises(MalformedScaleError) as excinfo:
        parse_scale("800600")
    assert excinfo.value.value == "800600"
    assert isinstance(excinfo.value, ConfigurationError)


def test_stream_url_and_description():
    config = Configuration(address="10.0.0.2", port="8554", route="/cam", password="pw")
    assert config.stream_url() == "rtsp://10.0.0.2:8554/cam"
    assert "password=***" in config.describe()
    assert "pw" not in config.describe()
    assert "password= " in Configuration().describe()
