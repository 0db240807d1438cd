"""Tests for darkroom/multipass module."""

from __future__ import annotations

import numpy as np
import pytest

from darkroom import multipass


class TestMisaligned:
    """Channel misregistration reads the snapshot, not the output."""

    def test_offset_formula(self) -> None:
        assert multipass.misregistration_offset(10) == 2
        assert multipass.misregistration_offset(1000) == 6

    def test_red_shift_on_row(self) -> None:
        src = np.zeros((1, 10, 3), dtype=np.uint8)
        src[0, :, 0] = np.arange(10) * 10 + 5
        src[0, :, 2] = np.arange(10) * 20
        out = multipass.misaligned(src)

        offset = 2
        for x in range(10):
            expected_r = src[0, x + offset, 0] if x + offset < 10 else src[0, x, 0]
            expected_b = src[0, x - offset, 2] if x - offset >= 0 else src[0, x, 2]
            assert out[0, x, 0] == expected_r
            assert out[0, x, 2] == expected_b
        np.testing.assert_array_equal(out[..., 1], src[..., 1])

    def test_source_not_modified(self, random_rgb: np.ndarray) -> None:
        before = random_rgb.copy()
        multipass.misaligned(random_rgb)
        np.testing.assert_array_equal(random_rgb, before)

    def test_rejects_aliased_destination(self, random_rgb: np.ndarray) -> None:
        with pytest.raises(ValueError):
            multipass.misaligned(random_rgb, random_rgb)


class TestVHS:
    """VHS smear."""

    def test_uniform_input_stays_uniform(self) -> None:
        src = np.full((4, 50, 3), 100, dtype=np.uint8)
        out = multipass.vhs_smear(src)
        # (100-20)*1.2 = 96 on every channel; gray → unchanged
        assert (out == 96).all()

    def test_red_comes_from_the_right(self) -> None:
        src = np.zeros((1, 200, 3), dtype=np.uint8)
        src[0, 150, 0] = 200
        out = multipass.vhs_smear(src)
        # shiftR = floor(200*0.01) = 2 → column 148 carries the red spike
        assert out[0, 148, 0] > out[0, 150, 0]


class TestInterlace:
    """DV interlace darkening."""

    def test_odd_rows_darker(self) -> None:
        src = np.full((4, 3, 3), 80, dtype=np.uint8)
        out = multipass.dv_interlace(src)
        assert out[0, 0].tolist() == [78, 80, 84]
        assert out[1, 0].tolist() == [59, 60, 63]
        np.testing.assert_array_equal(out[0], out[2])
        np.testing.assert_array_equal(out[1], out[3])

    def test_column_permutation_commutes(self, random_rgb: np.ndarray) -> None:
        perm = np.random.default_rng(3).permutation(random_rgb.shape[1])
        np.testing.assert_array_equal(
            multipass.dv_interlace(random_rgb)[:, perm],
            multipass.dv_interlace(random_rgb[:, perm]),
        )


class TestHalftone:
    """60s comic halftone."""

    def test_black_is_all_ink(self) -> None:
        out = multipass.halftone(np.zeros((4, 4, 3), dtype=np.uint8))
        assert (out.reshape(-1, 3) == [20, 20, 40]).all()

    def test_period_matches_dot_size(self) -> None:
        src = np.full((12, 12, 3), 128, dtype=np.uint8)
        out = multipass.halftone(src)
        tile = out[:4, :4]
        for y in range(0, 12, 4):
            for x in range(0, 12, 4):
                np.testing.assert_array_equal(out[y:y + 4, x:x + 4], tile)

    def test_mid_gray_mixes_ink_and_paper(self) -> None:
        out = multipass.halftone(np.full((4, 4, 3), 128, dtype=np.uint8))
        colours = {tuple(px) for px in out.reshape(-1, 3).tolist()}
        assert (20, 20, 40) in colours
        # paper: 128 pulled toward warm paper by (paper-255)*0.2
        assert (126, 124, 119) in colours


class TestEdgeInk:
    """80s comic outlines."""

    def test_last_row_and_column_never_edges(self, random_rgb: np.ndarray) -> None:
        mask = multipass.edge_mask(random_rgb)
        assert not mask[-1, :].any()
        assert not mask[:, -1].any()

    def test_vertical_boundary_detected(self) -> None:
        src = np.zeros((3, 4, 3), dtype=np.uint8)
        src[:, 2:] = 255
        mask = multipass.edge_mask(src)
        assert mask[0, 1] and mask[1, 1]
        assert not mask[0, 0]
        assert not mask[2, 1]

    def test_edges_inked_rest_boosted(self) -> None:
        src = np.full((3, 4, 3), 100, dtype=np.uint8)
        src[:, 2:] = 250
        out = multipass.edge_ink(src)
        assert out[0, 1].tolist() == [10, 10, 15]
        # non-edge gray: (100-128)*1.2+128 = 94.4
        assert out[0, 0].tolist() == [94, 94, 94]

    def test_boundary_pixels_not_inked_even_with_contrast(self) -> None:
        src = np.zeros((3, 3, 3), dtype=np.uint8)
        src[2, :] = 255
        src[:, 2] = 255
        out = multipass.edge_ink(src)
        assert out[2, 2].tolist() != [10, 10, 15]
        assert out[2, 0].tolist() != [10, 10, 15]
