from __future__ import annotations

import random

import pytest

from rsasig import config
from rsasig.crypto.keys import generate_keypair


@pytest.fixture(scope="session")
def keypair():
    return generate_keypair(1024, rng=random.Random(1024))


@pytest.fixture(scope="session")
def other_keypair():
    return generate_keypair(1024, rng=random.Random(4201))


@pytest.fixture
def rng():
    return random.Random(0xC0FFEE)


@pytest.fixture
def detailed_failures(monkeypatch):
    monkeypatch.setattr(config, "OPAQUE_FAILURES", False)
