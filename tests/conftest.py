"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

ROOT_PATH = Path(__file__).resolve().parents[1]

if str(ROOT_PATH) not in sys.path:
    sys.path.insert(0, str(ROOT_PATH))

from storehouse import Registry  # noqa: E402


@pytest.fixture
def registry():
    return Registry()


@pytest.fixture
def recorded_events():
    """
    Returns a function that subscribes to events on a registry and a list
    collecting (event, payload) tuples in emission order.
    """
    collected = []

    def subscribe(target, *events):
        for event in events:
            def listener(payload=None, _event=event):
                collected.append((_event, payload))
            target.on(event, listener)
        return collected

    return subscribe
