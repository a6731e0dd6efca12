"""Tests for the module-level API."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

import screenmatch
from screenmatch.find.screenshot import MSSCaptureProvider
from screenmatch.mock import StaticCaptureProvider
from screenmatch.model import MatchResult


@pytest.fixture
def bound_provider(provider):
    """Point the module-level functions at the in-memory screen."""
    screenmatch.set_capture_provider(provider)
    yield provider
    screenmatch.set_capture_provider(None)


class TestModuleFunctions:
    def test_find_on_screen(self, bound_provider, crop_template):
        match = screenmatch.find_on_screen(crop_template(20, 30, 40, 30))

        assert (match.x, match.y, match.confidence) == (20, 30, 1.0)

    def test_find_all_in_region(self, bound_provider, crop_template):
        results = screenmatch.find_all_in_region(
            crop_template(20, 30, 40, 30), 0, 0, 100, 100, {"searchMultipleScales": False}
        )

        assert [(m.x, m.y) for m in results] == [(20, 30)]

    def test_find_in_region_out_of_bounds(self, bound_provider, crop_template):
        with pytest.raises(screenmatch.BoundsError):
            screenmatch.find_in_region(crop_template(0, 0, 10, 10), 150, 100, 100, 100)

        assert bound_provider.capture_count == 0

    def test_capture_round_trip(self, bound_provider):
        capture = screenmatch.capture_screen_region(50, 60, 40, 30)
        template = screenmatch.image_resource_from_buffer(capture.encode())

        match = screenmatch.find_on_screen(template, {"searchMultipleScales": False})

        assert match == MatchResult(50, 60, 40, 30, 1.0, 1.0)
        assert screenmatch.capture_screen().width == 200

    def test_wait_for(self, bound_provider, crop_template):
        match = screenmatch.wait_for(crop_template(5, 5, 20, 20), timeout_ms=100, interval_ms=10)

        assert (match.x, match.y) == (5, 5)

    def test_wait_for_gone(self, bound_provider, foreign_template):
        assert screenmatch.wait_for_gone(foreign_template, timeout_ms=100, interval_ms=10) is True

    def test_image_loaders(self, tmp_path, crop_template):
        path = tmp_path / "icon.png"
        path.write_bytes(crop_template(0, 0, 8, 8).data)

        assert screenmatch.image_resource_sync(path).name == "icon"
        assert asyncio.run(screenmatch.image_resource(path)).data == path.read_bytes()

    def test_set_capture_provider_replaces_executor(self, provider):
        screenmatch.set_capture_provider(provider)
        try:
            assert screenmatch.get_executor().capture_provider is provider
            assert screenmatch.get_executor() is screenmatch.get_executor()
        finally:
            screenmatch.set_capture_provider(None)

    def test_rebinding_changes_screen(self, bound_provider, screen, crop_template):
        template = crop_template(20, 30, 40, 30)
        screenmatch.set_capture_provider(StaticCaptureProvider(screen[:, ::-1].copy()))

        assert screenmatch.find_on_screen(template, {"searchMultipleScales": False}) is None

    def test_rebinding_closes_replaced_mss_provider(self, provider):
        sct = MagicMock()
        sct.monitors = [{"left": 0, "top": 0, "width": 640, "height": 480}] * 2
        with patch("screenmatch.find.screenshot.mss_provider.mss.mss", return_value=sct):
            screenmatch.set_capture_provider(MSSCaptureProvider())
            screenmatch.get_executor().capture_provider.get_screen_size()

            screenmatch.set_capture_provider(provider)
        screenmatch.set_capture_provider(None)

        sct.close.assert_called_once_with()


class TestMatchHelpers:
    def test_center(self):
        assert screenmatch.get_match_center(MatchResult(10, 20, 30, 41, 0.9)) == (25, 41)

    def test_bounds(self):
        assert screenmatch.get_match_bounds(MatchResult(10, 20, 30, 40, 0.9)) == {
            "left": 10,
            "top": 20,
            "right": 40,
            "bottom": 60,
        }


def test_version():
    assert screenmatch.__version__ == "0.1.0"
