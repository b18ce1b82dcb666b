"""Pytest configuration for renderer tests.

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
def clear_all_scene_data():
    """Reset scene and render state before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here to ensure Taichi is initialized before fields are declared
    from spheretrace.core.degeneracy import reset_degenerate_count
    from spheretrace.core.integrator import DEFAULT_BACKGROUND, set_background
    from spheretrace.core.renderer import reset_render_target
    from spheretrace.materials.lambertian import DEFAULT_SHADOW_BIAS, set_shadow_bias
    from spheretrace.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        set_background(DEFAULT_BACKGROUND)
        set_shadow_bias(DEFAULT_SHADOW_BIAS)
        reset_degenerate_count()
        reset_render_target()

    _clear_all()

    yield

    _clear_all()
