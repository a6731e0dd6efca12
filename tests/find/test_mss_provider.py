"""Tests for the mss-backed capture provider, with mss mocked out."""

import threading
from unittest.mock import MagicMock, patch

import pytest
from mss.exception import ScreenShotError

from screenmatch.exceptions import ScreenCaptureException
from screenmatch.find.screenshot import MSSCaptureProvider
from screenmatch.model import ScreenRegion

MONITORS = [
    {"left": 0, "top": 0, "width": 3840, "height": 1080},
    {"left": 0, "top": 0, "width": 1920, "height": 1080},
    {"left": 1920, "top": 0, "width": 1920, "height": 1080},
]


def fake_shot(width, height):
    shot = MagicMock()
    shot.width = width
    shot.height = height
    shot.bgra = bytearray(width * height * 4)
    return shot


@pytest.fixture
def sct():
    instance = MagicMock()
    instance.monitors = MONITORS
    instance.grab.side_effect = lambda area: fake_shot(area["width"], area["height"])
    with patch("screenmatch.find.screenshot.mss_provider.mss.mss", return_value=instance):
        yield instance


class TestMSSCaptureProvider:
    def test_screen_size_of_primary_monitor(self, sct):
        assert MSSCaptureProvider().get_screen_size() == (1920, 1080)

    def test_full_capture(self, sct):
        capture = MSSCaptureProvider().capture()

        sct.grab.assert_called_once_with(MONITORS[1])
        assert (capture.width, capture.height) == (1920, 1080)
        assert len(capture.pixel_bytes) == 1920 * 1080 * 4

    def test_region_offset_by_monitor_origin(self, sct):
        capture = MSSCaptureProvider(monitor=2).capture(ScreenRegion(10, 20, 30, 40))

        sct.grab.assert_called_once_with({"left": 1930, "top": 20, "width": 30, "height": 40})
        assert (capture.width, capture.height) == (30, 40)

    def test_monitor_from_settings(self, sct, monkeypatch):
        monkeypatch.setenv("SCREENMATCH_MONITOR", "0")
        assert MSSCaptureProvider().get_screen_size() == (3840, 1080)

    def test_invalid_monitor(self, sct):
        with pytest.raises(ScreenCaptureException) as exc_info:
            MSSCaptureProvider(monitor=5).capture()

        assert exc_info.value.context["monitor"] == 5

    def test_grab_failure_wrapped(self, sct):
        sct.grab.side_effect = ScreenShotError("XGetImage() failed")

        with pytest.raises(ScreenCaptureException, match="XGetImage"):
            MSSCaptureProvider().capture()

    def test_instance_reused_per_thread(self, sct):
        provider = MSSCaptureProvider()
        provider.capture()
        provider.capture()

        assert provider.sct is sct


class TestClose:
    def test_close_releases_handle(self, sct):
        provider = MSSCaptureProvider()
        provider.capture()

        provider.close()

        sct.close.assert_called_once_with()

    def test_context_manager_closes(self, sct):
        with MSSCaptureProvider() as provider:
            provider.capture()

        sct.close.assert_called_once_with()

    def test_close_without_capture_is_noop(self, sct):
        MSSCaptureProvider().close()
        sct.close.assert_not_called()

    def test_close_twice(self, sct):
        provider = MSSCaptureProvider()
        provider.capture()

        provider.close()
        provider.close()

        sct.close.assert_called_once_with()

    def test_handles_from_every_thread_closed(self):
        handles = []

        def make_handle():
            handle = MagicMock()
            handle.monitors = MONITORS
            handles.append(handle)
            return handle

        with patch("screenmatch.find.screenshot.mss_provider.mss.mss", side_effect=make_handle):
            provider = MSSCaptureProvider()
            provider.get_screen_size()
            worker = threading.Thread(target=provider.get_screen_size)
            worker.start()
            worker.join()

            provider.close()

        assert len(handles) == 2
        assert all(handle.close.call_count == 1 for handle in handles)

    def test_reopens_after_close(self, sct):
        provider = MSSCaptureProvider()
        provider.capture()
        provider.close()

        provider.capture()

        assert sct.grab.call_count == 2

    def test_close_failure_logged_not_raised(self, sct):
        sct.close.side_effect = ScreenShotError("display gone")
        provider = MSSCaptureProvider()
        provider.capture()

        provider.close()

        sct.close.assert_called_once_with()
