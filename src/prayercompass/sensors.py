"""Magnetometer boundary — the push-based sample source the compass engine subscribes to."""

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Protocol

from prayercompass.models import MagneticSample

logger = logging.getLogger(__name__)

SampleListener = Callable[[MagneticSample], None]


class SensorUnavailableError(Exception):
    """No magnetometer on this device, or permission to read it was denied."""


class Subscription(Protocol):
    def remove(self) -> None: ...


class MagnetometerSource(Protocol):
    """A platform sensor that pushes raw field samples to one listener per subscription."""

    def is_available(self) -> bool: ...

    def subscribe(self, listener: SampleListener, interval_ms: int) -> Subscription:
        """Start delivering samples every ``interval_ms``.

        Raises:
            SensorUnavailableError: If the sensor cannot be opened.
        """
        ...


class _ReplaySubscription(threading.Thread):
    """Delivers samples on a daemon thread until exhausted or removed."""

    def __init__(
        self,
        samples: Iterable[MagneticSample],
        listener: SampleListener,
        interval_s: float,
    ):
        super().__init__(name="magnetometer-replay", daemon=True)
        self._samples = samples
        self._listener = listener
        self._interval_s = interval_s
        self._halt = threading.Event()
        self.finished = threading.Event()

    def run(self) -> None:
        try:
            for sample in self._samples:
                if self._halt.is_set():
                    break
                self._listener(sample)
                if self._halt.wait(self._interval_s):
                    break
        finally:
            self.finished.set()

    def remove(self) -> None:
        self._halt.set()
        # A listener may remove its own subscription from inside the callback
        if threading.current_thread() is not self and self.is_alive():
            self.join(timeout=1.0)


class ReplayMagnetometer:
    """Replays recorded samples as if they came from a live sensor.

    Used for demos, recorded traces and tests. ``available=False`` simulates a
    device without a magnetometer (or a denied permission).
    """

    def __init__(
        self,
        samples: Iterable[MagneticSample | tuple[float, float, float]],
        available: bool = True,
    ):
        self._samples = [
            s if isinstance(s, MagneticSample) else MagneticSample(*s) for s in samples
        ]
        self._available = available
        self.last_subscription: _ReplaySubscription | None = None

    def is_available(self) -> bool:
        return self._available

    def subscribe(self, listener: SampleListener, interval_ms: int) -> _ReplaySubscription:
        if not self._available:
            raise SensorUnavailableError("Magnetometer is not available on this device")
        subscription = _ReplaySubscription(
            list(self._samples), listener, interval_ms / 1000.0
        )
        logger.debug(
            "Replaying %d magnetometer samples every %d ms",
            len(self._samples),
            interval_ms,
        )
        subscription.start()
        self.last_subscription = subscription
        return subscription
