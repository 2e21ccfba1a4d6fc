"""
Pytest configuration for polystrand tests.

Puts src/ on sys.path and restores global state (feature flags, logger)
around every test.
"""

import sys
import os

import pytest

# Add src/ to sys.path for imports
_src_root = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if _src_root not in sys.path:
    sys.path.insert(0, _src_root)

from polystrand.config.feature_flags import FeatureFlags
from polystrand.models.system import System
from polystrand.utils.logger.logger import Logger


@pytest.fixture(autouse=True)
def reset_global_state():
    FeatureFlags.reset()
    Logger.set_log_storage_strategy(None)
    Logger.set_minimum_priority(Logger.LogPriority.DEBUG)
    Logger.enable_logging()
    yield
    FeatureFlags.reset()
    Logger.set_log_storage_strategy(None)
    Logger.set_minimum_priority(Logger.LogPriority.DEBUG)
    Logger.enable_logging()


@pytest.fixture
def notifications():
    """List collecting every notify() message."""
    return []


@pytest.fixture
def system(notifications):
    return System(notify=notifications.append)


def link_linear(elements):
    """Link elements 5'->3' in list order."""
    for prev, nxt in zip(elements, elements[1:]):
        prev.n3 = nxt
        nxt.n5 = prev


@pytest.fixture
def build_chain():
    """
    Factory: build_chain(system, sequence, family='nucleic_acid',
    circular=False, **kwdata) -> (strand, elements in 5'->3' order).
    """
    def _build(system, sequence, family="nucleic_acid", circular=False, **kwdata):
        strand = system.create_strand(family, **kwdata)
        elements = []
        for symbol in sequence:
            e = strand.create_element()
            e.type = symbol
            elements.append(e)
        link_linear(elements)
        if circular:
            elements[-1].n3 = elements[0]
            elements[0].n5 = elements[-1]
        strand.set_from(elements[len(elements) // 2])
        return strand, elements
    return _build
