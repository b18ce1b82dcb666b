"""Tests for the integrator: material dispatch, background and degeneracy.

Tests cover:
- Background color for rays that miss
- Non-diffuse materials rendering black
- Normal flipping for rays that start inside a sphere
- DegenerateGeometryError for zero directions and lights on surfaces
"""

import pytest

APEX_RAY_ORIGIN = (0.0, 5.0, -10.0)
APEX_RAY_DIRECTION = (0.0, -1.0, 0.0)
SPHERE_CENTER = (0.0, 0.0, -10.0)


class TestBackground:
    """Tests for rays that hit nothing."""

    def test_default_background_is_black(self):
        from spheretrace.core.integrator import trace_single_ray

        assert trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) == (0.0, 0.0, 0.0)

    def test_custom_background(self):
        from spheretrace.core.integrator import get_background, set_background, trace_single_ray

        set_background((0.25, 0.5, 0.75))
        assert get_background() == (0.25, 0.5, 0.75)
        assert trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) == (0.25, 0.5, 0.75)

    def test_background_not_used_on_hit(self):
        from spheretrace.core.integrator import set_background, trace_single_ray
        from spheretrace.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_sphere(SPHERE_CENTER, 1.0, albedo=(1.0, 1.0, 1.0))
        set_background((0.25, 0.5, 0.75))

        # Hit but unlit: black, not background
        assert trace_single_ray(APEX_RAY_ORIGIN, APEX_RAY_DIRECTION) == (0.0, 0.0, 0.0)


class TestMaterialDispatch:
    """Tests for shading by material tag."""

    def test_diffuse_is_shaded(self):
        from spheretrace.core.integrator import trace_single_ray
        from spheretrace.scene.manager import MaterialType, SceneManager

        scene = SceneManager()
        scene.add_sphere(SPHERE_CENTER, 1.0, albedo=(0.5, 0.5, 0.5), material=MaterialType.DIFFUSE)
        scene.add_light((0.0, 10.0, -10.0))

        color = trace_single_ray(APEX_RAY_ORIGIN, APEX_RAY_DIRECTION)
        assert all(abs(c - 0.5) < 1e-5 for c in color)

    @pytest.mark.parametrize(
        "material_name",
        ["SPECULAR", "FRESNEL", "REFLECT", "REFLECT_AND_REFRACT"],
    )
    def test_non_diffuse_materials_render_black(self, material_name):
        from spheretrace.core.integrator import set_background, trace_single_ray
        from spheretrace.scene.manager import MaterialType, SceneManager

        scene = SceneManager()
        scene.add_sphere(
            SPHERE_CENTER, 1.0, albedo=(0.5, 0.5, 0.5), material=MaterialType[material_name]
        )
        scene.add_light((0.0, 10.0, -10.0))
        set_background((1.0, 1.0, 1.0))

        assert trace_single_ray(APEX_RAY_ORIGIN, APEX_RAY_DIRECTION) == (0.0, 0.0, 0.0)

    def test_non_diffuse_sphere_still_casts_shadows(self):
        from spheretrace.core.integrator import trace_single_ray
        from spheretrace.scene.manager import MaterialType, SceneManager

        scene = SceneManager()
        scene.add_sphere(SPHERE_CENTER, 1.0, albedo=(0.5, 0.5, 0.5))
        scene.add_sphere((0.0, 7.5, -10.0), 0.5, material=MaterialType.REFLECT)
        scene.add_light((0.0, 10.0, -10.0))

        assert trace_single_ray(APEX_RAY_ORIGIN, APEX_RAY_DIRECTION) == (0.0, 0.0, 0.0)


class TestInsideHits:
    """Tests for rays starting inside a sphere."""

    def test_normal_faces_ray_from_inside(self):
        """From the center looking down, the far wall is lit by a light below it.

        The outward normal at the bottom points down toward the light, but the
        shading normal is flipped to face the ray (up), so N.L < 0 and the
        light contributes nothing.
        """
        from spheretrace.core.integrator import trace_single_ray
        from spheretrace.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_sphere(SPHERE_CENTER, 2.0, albedo=(1.0, 1.0, 1.0))
        scene.add_light((0.0, -10.0, -10.0))

        color = trace_single_ray(SPHERE_CENTER, (0.0, -1.0, 0.0))
        assert color == (0.0, 0.0, 0.0)


class TestDegenerateGeometry:
    """Tests for degenerate input reporting."""

    def test_zero_direction_raises(self):
        from spheretrace.core.integrator import trace_single_ray
        from spheretrace.errors import DegenerateGeometryError

        with pytest.raises(DegenerateGeometryError):
            trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))

    def test_light_on_hit_point_raises(self):
        from spheretrace.core.integrator import trace_single_ray
        from spheretrace.errors import DegenerateGeometryError
        from spheretrace.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_sphere(SPHERE_CENTER, 1.0)
        # Exactly at the apex where the primary ray lands
        scene.add_light((0.0, 1.0, -10.0))

        with pytest.raises(DegenerateGeometryError):
            trace_single_ray(APEX_RAY_ORIGIN, APEX_RAY_DIRECTION)

    def test_counter_resets_between_traces(self):
        from spheretrace.core.degeneracy import get_degenerate_count
        from spheretrace.core.integrator import trace_single_ray
        from spheretrace.errors import DegenerateGeometryError
        from spheretrace.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_sphere(SPHERE_CENTER, 1.0)
        scene.add_light((0.0, 1.0, -10.0))
        with pytest.raises(DegenerateGeometryError):
            trace_single_ray(APEX_RAY_ORIGIN, APEX_RAY_DIRECTION)
        assert get_degenerate_count() == 1

        # A miss records nothing new
        trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        assert get_degenerate_count() == 0
