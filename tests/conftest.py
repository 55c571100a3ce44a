"""Shared fixtures for the Staircase Calculator test suite."""
import sys
import os
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stair_calculator import DEFAULT_CONFIG, StairInputParams, calculate_stair_metrics


@pytest.fixture
def default_config():
    """Returns a copy of the default form values (camelCase keys)."""
    return DEFAULT_CONFIG.copy()


@pytest.fixture
def default_params():
    return StairInputParams(**DEFAULT_CONFIG)


@pytest.fixture
def default_metrics(default_params):
    """Report for the default 4 m staircase."""
    return calculate_stair_metrics(default_params)


@pytest.fixture
def make_params():
    """Factory: default params with overrides, keyed like DEFAULT_CONFIG."""
    def _make(**overrides):
        config = DEFAULT_CONFIG.copy()
        config.update(overrides)
        return StairInputParams(**config)
    return _make
