"""Pytest configuration for rtcore tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_packed_target():
    """Clear the packed accumulation buffer before and after each test."""
    # Import here to ensure Taichi is initialized
    from src.rtcore.color.progressive import clear_packed_target

    clear_packed_target()
    yield
    clear_packed_target()
