"""
Shared fixtures for emlib_builder tests.

RecordingEnv stands in for an SCons environment and records what the
toolchain helpers ask SCons to do.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from emlib_builder.kits import KitVariant
from emlib_builder.profiles import base_config


class RecordingEnv:
    """Minimal SCons environment double."""

    def __init__(self):
        self.vars = {}
        self.objects = []
        self.libraries = []

    def Replace(self, **kwargs):
        self.vars.update(kwargs)

    def Append(self, **kwargs):
        for key, value in kwargs.items():
            self.vars.setdefault(key, []).extend(value)

    def StaticObject(self, target, source):
        self.objects.append((target, source))
        return [target]

    def StaticLibrary(self, target, source):
        self.libraries.append((target, source))
        return [target]


class CountingKit:
    """Kit adapter that counts how often it contributes."""

    def __init__(self, variant=KitVariant.STK3700):
        self.variant = variant
        self.calls = 0

    def contribute(self, config):
        self.calls += 1
        return self.variant.contribute(config)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    return tmp_path / "emlib"


@pytest.fixture
def base(project_dir: Path):
    return base_config(str(project_dir))


@pytest.fixture
def recording_env() -> RecordingEnv:
    return RecordingEnv()


@pytest.fixture
def counting_kit() -> CountingKit:
    return CountingKit()
