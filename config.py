"""Configuration management for the RTSP relay.

Defaults are compiled in below and may be overridden from the process
environment. Command-line overrides are applied afterwards by ``arguments``.
"""

import os
from dataclasses import dataclass, field
from typing import NamedTuple

from exceptions import MalformedScaleError
from logger import get_logger

logger = get_logger(__name__)

DEFAULT_ADDRESS = "0.0.0.0"
DEFAULT_PORT = "8554"
DEFAULT_ROUTE = "/test"
DEFAULT_USERNAME = ""
DEFAULT_PASSWORD = ""
DEFAULT_FRAMERATE = "30"
DEFAULT_WIDTH = "1280"
DEFAULT_HEIGHT = "720"
DEFAULT_INPUT = "pattern"
DEFAULT_TIME_ENABLED = False

SCALE_SEPARATOR = "x"

# Environment variable bound to each plain text field
ENV_FIELDS = {
    "address": "RTSP_ADDRESS",
    "port": "RTSP_PORT",
    "route": "RTSP_ROUTE",
    "username": "RTSP_USERNAME",
    "password": "RTSP_PASSWORD",
    "framerate": "RTSP_FRAMERATE",
}
ENV_SCALE = "RTSP_RESOLUTION"
ENV_INPUT = "INPUT"
ENV_TIME = "ENABLE_TIME_OVERLAY"


class Scale(NamedTuple):
    """Target video size as text tokens."""
    width: str
    height: str


def parse_scale(value):
    """Split a ``<width>x<height>`` string on its first separator.

    Either half may be empty. Raises MalformedScaleError when the
    separator is missing.
    """
    width, separator, height = value.partition(SCALE_SEPARATOR)
    if not separator:
        raise MalformedScaleError(value)
    return Scale(width, height)


@dataclass
class Configuration:
    """Effective runtime configuration of the relay."""
    address: str = DEFAULT_ADDRESS
    port: str = DEFAULT_PORT
    route: str = DEFAULT_ROUTE
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    framerate: str = DEFAULT_FRAMERATE
    scale: Scale = field(default_factory=lambda: Scale(DEFAULT_WIDTH, DEFAULT_HEIGHT))
    input: str = DEFAULT_INPUT
    time: bool = DEFAULT_TIME_ENABLED

    def stream_url(self):
        """URL clients use to reach the relayed stream."""
        return f"rtsp://{self.address}:{self.port}{self.route}"

    def describe(self):
        """One-line summary for logs, with the password masked."""
        password = "***" if self.password else ""
        return (
            f"address={self.address} port={self.port} route={self.route} "
            f"username={self.username} password={password} "
            f"framerate={self.framerate} scale={self.scale.width}x{self.scale.height} "
            f"input={self.input} time={self.time}"
        )


def from_environment(environ=None):
    """Build a fully populated configuration from defaults and the environment.

    A variable that is present overrides its field, even when empty. This
    never fails: a malformed RTSP_RESOLUTION is reported and the default
    scale is kept.

    Args:
        environ: Mapping to read variables from. Defaults to os.environ.

    Returns:
        Configuration: the resolved record.
    """
    if environ is None:
        environ = os.environ

    config = Configuration()

    for name, variable in ENV_FIELDS.items():
        value = environ.get(variable)
        if value is not None:
            # Route is taken verbatim here; only the argument stage adds '/'
            setattr(config, name, value)
            logger.debug(f"{variable} overrides {name}")

    scale = environ.get(ENV_SCALE)
    if scale is not None:
        try:
            config.scale = parse_scale(scale)
            logger.debug(f"{ENV_SCALE} overrides scale")
        except MalformedScaleError as e:
            logger.warning(f"{e}. Using default values")

    input_source = environ.get(ENV_INPUT)
    if input_source is not None:
        config.input = input_source
        logger.debug(f"{ENV_INPUT} overrides input")

    time_overlay = environ.get(ENV_TIME)
    if time_overlay is not None:
        config.time = time_overlay != "false"
        logger.debug(f"{ENV_TIME} sets time overlay to {config.time}")

    return config
