"""Live tracking errors."""


class TrackingError(Exception):
    """Base exception for live tracking errors."""

    pass


class TrackerStateError(TrackingError):
    """Raised when a tracker operation does not fit its state (e.g., finish while idle)."""

    pass


class SensorUnavailableError(TrackingError):
    """Raised by a sensor stream when permission or hardware is missing.

    Never fatal: the session continues without that sensor.
    """

    pass
