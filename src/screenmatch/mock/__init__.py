"""Mock implementations for offline and headless use."""

from .static_capture import StaticCaptureProvider

__all__ = ["StaticCaptureProvider"]
