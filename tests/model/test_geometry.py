"""Tests for MatchResult, ScreenRegion and ScreenCapture."""

import numpy as np
import pytest
from imaging import noise

from screenmatch.exceptions import BoundsError, DecodeError
from screenmatch.model import ImageResource, MatchResult, ScreenCapture, ScreenRegion


class TestMatchResult:
    def test_edges_and_area(self):
        match = MatchResult(x=10, y=20, width=30, height=40, confidence=0.9)

        assert match.right == 40
        assert match.bottom == 60
        assert match.area == 1200
        assert match.bounds == (10, 20, 30, 40)
        assert match.scale == 1.0

    def test_center_rounds_half_up(self):
        assert MatchResult(0, 0, 3, 5, 1.0).center == (2, 3)
        assert MatchResult(10, 10, 4, 4, 1.0).center == (12, 12)

    def test_iou(self):
        a = MatchResult(0, 0, 10, 10, 1.0)
        b = MatchResult(5, 0, 10, 10, 1.0)

        assert a.iou(a) == 1.0
        assert a.iou(b) == pytest.approx(50 / 150)
        assert a.iou(MatchResult(10, 0, 10, 10, 1.0)) == 0.0

    def test_overlaps_excludes_touching_edges(self):
        a = MatchResult(0, 0, 10, 10, 1.0)

        assert a.overlaps(MatchResult(9, 9, 5, 5, 1.0))
        assert not a.overlaps(MatchResult(10, 0, 5, 5, 1.0))

    def test_offset_returns_copy(self):
        match = MatchResult(1, 2, 3, 4, 0.85, scale=0.5)
        moved = match.offset(100, 200)

        assert moved == MatchResult(101, 202, 3, 4, 0.85, scale=0.5)
        assert match.x == 1

    def test_to_dict(self):
        assert MatchResult(1, 2, 3, 4, 1.0, 0.9).to_dict() == {
            "x": 1,
            "y": 2,
            "width": 3,
            "height": 4,
            "confidence": 1.0,
            "scale": 0.9,
        }


class TestScreenRegion:
    def test_valid_region_passes(self):
        region = ScreenRegion(0, 0, 200, 150)
        assert region.validate_within(200, 150) is region

    @pytest.mark.parametrize(
        "region",
        [
            ScreenRegion(0, 0, 0, 10),
            ScreenRegion(0, 0, 10, -1),
            ScreenRegion(-1, 0, 10, 10),
            ScreenRegion(0, -5, 10, 10),
            ScreenRegion(150, 0, 51, 10),
            ScreenRegion(0, 100, 10, 51),
        ],
    )
    def test_invalid_regions(self, region):
        with pytest.raises(BoundsError) as exc_info:
            region.validate_within(200, 150)

        assert exc_info.value.error_code == "REGION_OUT_OF_BOUNDS"
        assert exc_info.value.region == region.as_tuple()
        assert exc_info.value.screen_size == (200, 150)

    def test_contains_is_edge_inclusive(self):
        region = ScreenRegion(10, 10, 20, 20)

        assert region.contains(MatchResult(10, 10, 5, 5, 1.0))
        assert region.contains(MatchResult(30, 30, 5, 5, 1.0))
        assert not region.contains(MatchResult(31, 10, 5, 5, 1.0))


class TestScreenCapture:
    def test_from_bgr_round_trip(self):
        image = noise(7, 5, seed=11)
        capture = ScreenCapture.from_bgr(image)

        assert (capture.width, capture.height) == (7, 5)
        assert len(capture.pixel_bytes) == 7 * 5 * 4
        assert np.array_equal(capture.to_bgr(), image)

    def test_from_grayscale(self):
        capture = ScreenCapture.from_bgr(np.full((2, 3), 9, dtype=np.uint8))

        assert (capture.to_bgr() == 9).all()

    def test_buffer_size_mismatch(self):
        capture = ScreenCapture(width=4, height=4, pixel_bytes=b"\x00" * 10)

        with pytest.raises(DecodeError):
            capture.to_bgr()

    def test_encode_produces_usable_template(self):
        image = noise(9, 6, seed=12)
        template = ImageResource.from_buffer(ScreenCapture.from_bgr(image).encode())

        assert np.array_equal(template.pixels, image)
