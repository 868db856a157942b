# tests/conftest.py

from __future__ import annotations

import weakref

import pytest

from laterkit.core import host as host_module


@pytest.fixture()
def host_registry() -> weakref.WeakKeyDictionary:
    """The live loop -> host registry, for tests that check what it retains."""
    return host_module._hosts
