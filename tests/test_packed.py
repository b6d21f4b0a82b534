"""Unit tests for packed color words and the incremental average.

Tests cover:
- 0xAABBGGRR packing and unpacking
- First sample sets the color regardless of the previous word
- Running average over several samples with truncating division
- Clamping, alpha forcing and sanitizing of bad samples
- Kernel-side variant
"""

import math

import pytest
import taichi as ti


class TestPackColor:
    """Tests for pack_color and unpack_color."""

    def test_byte_layout(self):
        """Test that red is least significant and alpha most significant."""
        from src.rtcore.color.packed import pack_color

        assert pack_color(0x11, 0x22, 0x33, 0x44) == 0x44332211

    def test_default_alpha_is_opaque(self):
        from src.rtcore.color.packed import pack_color

        assert pack_color(0, 0, 0) == 0xFF000000

    def test_unpack(self):
        from src.rtcore.color.packed import unpack_color

        assert unpack_color(0x44332211) == (0x11, 0x22, 0x33, 0x44)

    def test_unpack_signed_word(self):
        """Test that words stored in signed 32-bit buffers are accepted."""
        from src.rtcore.color.packed import unpack_color

        assert unpack_color(-1) == (255, 255, 255, 255)
        assert unpack_color(0xFF0000FF - (1 << 32)) == (255, 0, 0, 255)

    def test_out_of_range_channel_raises(self):
        from src.rtcore.color.packed import pack_color

        with pytest.raises(ValueError, match="red channel"):
            pack_color(256, 0, 0)
        with pytest.raises(ValueError, match="alpha channel"):
            pack_color(0, 0, 0, -1)


class TestIncrementalAverage:
    """Tests for incremental_average."""

    def test_first_sample_ignores_previous(self):
        """Test that with one sample the previous word has no weight."""
        from src.rtcore.color.packed import incremental_average, unpack_color

        sample = (0.2, 0.4, 0.6)
        expected = (int(0.2 * 255), int(0.4 * 255), int(0.6 * 255), 255)
        for previous in [0, 0xFFFFFFFF, 0x12345678, 0x00808080]:
            assert unpack_color(incremental_average(sample, previous, 1)) == expected

    def test_first_sample_full_range(self):
        from src.rtcore.color.packed import incremental_average

        assert incremental_average((1.0, 1.0, 1.0), 0, 1) == 0xFFFFFFFF
        assert incremental_average((0.0, 0.0, 0.0), 0xFFFFFFFF, 1) == 0xFF000000

    def test_second_sample_averages(self):
        from src.rtcore.color.packed import incremental_average, pack_color, unpack_color

        previous = pack_color(200, 100, 0)
        result = incremental_average((0.0, 1.0, 1.0), previous, 2)
        # (1 * 200 + 0) // 2, (1 * 100 + 255) // 2, (0 + 255) // 2
        assert unpack_color(result) == (100, 177, 127, 255)

    def test_constant_samples_keep_average(self):
        from src.rtcore.color.packed import incremental_average, unpack_color

        sample = (0.2, 0.4, 0.6)
        word = incremental_average(sample, 0, 1)
        first = unpack_color(word)
        for n in range(2, 50):
            word = incremental_average(sample, word, n)
        assert unpack_color(word) == first

    def test_alternating_samples_truncate(self):
        """Test the running average of alternating white and black samples."""
        from src.rtcore.color.packed import incremental_average, unpack_color

        word = 0
        reds = []
        for n in range(1, 5):
            value = 1.0 if n % 2 else 0.0
            word = incremental_average((value, value, value), word, n)
            reds.append(unpack_color(word)[0])

        # 255, 255 // 2, (2 * 127 + 255) // 3, (3 * 169) // 4
        assert reds == [255, 127, 169, 126]

    def test_stored_alpha_ignored_and_forced_opaque(self):
        from src.rtcore.color.packed import incremental_average, pack_color, unpack_color

        previous = pack_color(50, 50, 50, alpha=0)
        result = incremental_average((50 / 255, 50 / 255, 50 / 255), previous, 3)
        assert unpack_color(result)[3] == 255

    def test_over_bright_sample_clamped(self):
        from src.rtcore.color.packed import incremental_average, unpack_color

        result = incremental_average((4.0, 1.0, 0.0), 0, 1)
        assert unpack_color(result) == (255, 255, 0, 255)

    def test_bad_samples_contribute_zero(self):
        from src.rtcore.color.packed import incremental_average, unpack_color

        result = incremental_average((math.nan, math.inf, -0.5), 0, 1)
        assert unpack_color(result) == (0, 0, 0, 255)

    def test_result_is_unsigned(self):
        from src.rtcore.color.packed import incremental_average

        result = incremental_average((0.5, 0.5, 0.5), 0, 1)
        assert 0 <= result <= 0xFFFFFFFF

    def test_invalid_sample_count_raises(self):
        from src.rtcore.color.packed import incremental_average

        with pytest.raises(ValueError, match="less than 1"):
            incremental_average((0.5, 0.5, 0.5), 0, 0)


class TestKernelIncrementalAverage:
    """Tests for the kernel-side incremental average."""

    def test_ti_incremental_average_matches_host(self):
        from src.rtcore.color.packed import (
            incremental_average,
            pack_color,
            ti_incremental_average,
        )

        previous = pack_color(200, 100, 0)
        result = ti.field(dtype=ti.u32, shape=())

        @ti.kernel
        def test_kernel(prev: ti.u32, n: ti.u32):
            result[None] = ti_incremental_average(ti.math.vec3(0.0, 1.0, 1.0), prev, n)

        test_kernel(previous, 2)
        assert int(result[None]) == incremental_average((0.0, 1.0, 1.0), previous, 2)

    def test_ti_incremental_average_first_sample(self):
        from src.rtcore.color.packed import ti_incremental_average

        result = ti.field(dtype=ti.u32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = ti_incremental_average(
                ti.math.vec3(1.0, 0.0, 1.0), ti.u32(0x12345678), ti.u32(1)
            )

        test_kernel()
        assert int(result[None]) == 0xFFFF00FF
