#!/usr/bin/env python3

import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from tests.utils import RESOURCES, StubOpener

settings.register_profile(
    "ci", max_examples=1000, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug",
    max_examples=5,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target],
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev").lower())


@pytest.fixture
def resources() -> Path:
    return RESOURCES


@pytest.fixture
def stub_opener() -> StubOpener:
    return StubOpener()
