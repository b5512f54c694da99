#!/usr/bin/env python3
"""Setup script for the RTSP relay."""

import re
from pathlib import Path

from setuptools import setup

HERE = Path(__file__).parent


def read_version():
    """Read __version__ from the entry point module."""
    match = re.search(r'^__version__ = "([^"]+)"', (HERE / "rtsprelay.py").read_text(), re.M)
    return match.group(1) if match else "0.0.0"


setup(
    name="rtsp-relay",
    version=read_version(),
    description="Runtime configuration resolution for an RTSP relay server",
    license="Apache-2.0",
    python_requires=">=3.8",
    py_modules=["arguments", "config", "exceptions", "logger", "rtsprelay"],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "rtsp-relay=rtsprelay:main",
        ],
    },
)
