"""Unit tests for vector normalization and parsing.

Tests cover:
- Texture coordinate wrapping (positive, negative, integral values)
- Color rescaling by the brightest channel
- Parsing vectors from text and sequences
- Kernel-side variants
"""

import pytest
import taichi as ti


class TestNormalizeCoords:
    """Tests for texture coordinate wrapping."""

    def test_wraps_values_above_one(self):
        from src.rtcore.core.vectors import normalize_coords

        u, v = normalize_coords((1.5, 2.25))
        assert u == pytest.approx(0.5)
        assert v == pytest.approx(0.25)

    def test_wraps_negative_values_into_unit_range(self):
        """Test that negative values wrap instead of giving negative fractions."""
        from src.rtcore.core.vectors import normalize_coords

        u, v = normalize_coords((1.5, -0.5))
        assert u == pytest.approx(0.5)
        assert v == pytest.approx(0.5)

        u, v = normalize_coords((-0.25, -2.75))
        assert u == pytest.approx(0.75)
        assert v == pytest.approx(0.25)

    def test_integral_values_wrap_to_zero(self):
        from src.rtcore.core.vectors import normalize_coords

        assert normalize_coords((1.0, -3.0)) == (0.0, 0.0)

    def test_values_in_range_unchanged(self):
        from src.rtcore.core.vectors import normalize_coords

        assert normalize_coords((0.0, 0.75)) == (0.0, 0.75)


class TestNormalizeColor:
    """Tests for color rescaling."""

    def test_rescales_by_brightest_channel(self):
        from src.rtcore.core.vectors import normalize_color

        assert normalize_color((2.0, 1.0, 0.5)) == pytest.approx((1.0, 0.5, 0.25))

    def test_brightest_channel_can_be_any(self):
        from src.rtcore.core.vectors import normalize_color

        assert normalize_color((0.5, 1.0, 4.0)) == pytest.approx((0.125, 0.25, 1.0))

    def test_dim_color_unchanged(self):
        from src.rtcore.core.vectors import normalize_color

        assert normalize_color((0.5, 0.3, 0.1)) == (0.5, 0.3, 0.1)

    def test_max_of_exactly_one_unchanged(self):
        from src.rtcore.core.vectors import normalize_color

        assert normalize_color((1.0, 0.2, 0.0)) == (1.0, 0.2, 0.0)

    def test_negative_values_not_clamped(self):
        """Test that only over-bright colors are touched."""
        from src.rtcore.core.vectors import normalize_color

        assert normalize_color((-0.5, 0.2, 0.1)) == (-0.5, 0.2, 0.1)
        assert normalize_color((-1.0, 2.0, 0.0)) == pytest.approx((-0.5, 1.0, 0.0))


class TestParseVectors:
    """Tests for building vectors from text and sequences."""

    def test_to_vec3_from_text(self):
        from src.rtcore.core.vectors import to_vec3

        assert to_vec3("0.8 0.2  0.1") == pytest.approx((0.8, 0.2, 0.1))

    def test_to_vec3_from_sequence(self):
        from src.rtcore.core.vectors import to_vec3

        assert to_vec3([1, 2, 3]) == (1.0, 2.0, 3.0)

    def test_to_vec2_from_text(self):
        from src.rtcore.core.vectors import to_vec2

        assert to_vec2("0.5\t-1") == (0.5, -1.0)

    def test_wrong_count_raises(self):
        from src.rtcore.core.vectors import to_vec2, to_vec3

        with pytest.raises(ValueError, match="Expected 3 values"):
            to_vec3("1 2")
        with pytest.raises(ValueError, match="Expected 2 values"):
            to_vec2((1.0, 2.0, 3.0))

    def test_non_numeric_raises(self):
        from src.rtcore.core.vectors import to_vec3

        with pytest.raises(ValueError, match="Cannot parse"):
            to_vec3("1 two 3")


class TestKernelVectors:
    """Tests for the kernel-side normalization functions."""

    def test_ti_normalize_coords(self):
        from src.rtcore.core.vectors import ti_normalize_coords

        result = ti.Vector.field(2, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = ti_normalize_coords(ti.math.vec2(1.5, -0.5))

        test_kernel()
        assert result[None][0] == pytest.approx(0.5)
        assert result[None][1] == pytest.approx(0.5)

    def test_ti_normalize_color(self):
        from src.rtcore.core.vectors import ti_normalize_color

        bright = ti.Vector.field(3, dtype=ti.f32, shape=())
        dim = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            bright[None] = ti_normalize_color(ti.math.vec3(2.0, 1.0, 0.5))
            dim[None] = ti_normalize_color(ti.math.vec3(0.5, 0.3, 0.1))

        test_kernel()
        assert [bright[None][i] for i in range(3)] == pytest.approx([1.0, 0.5, 0.25])
        assert [dim[None][i] for i in range(3)] == pytest.approx([0.5, 0.3, 0.1])
