"""Compass fusion engine — magnetometer samples to heading, Qibla offset and calibration state."""

import logging
import math
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from prayercompass.astronomy import normalize_360, normalize_to_180
from prayercompass.models import (
    CalibrationStatus,
    CompassReading,
    GeoPoint,
    MagneticSample,
    QiblaBearing,
)
from prayercompass.qibla import bearing_and_distance
from prayercompass.sensors import MagnetometerSource, SensorUnavailableError, Subscription

logger = logging.getLogger(__name__)

HeadingCallback = Callable[[float, float], None]
ReadingCallback = Callable[[CompassReading], None]

_CARDINALS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


@dataclass(frozen=True)
class CompassSettings:
    update_interval_ms: int = 100
    window_capacity: int = 10
    min_calibration_samples: int = 5
    calibration_threshold_deg: float = 5.0
    alignment_threshold_deg: float = 3.0
    noise_floor: float = 0.01  # Samples with |x| and |y| both below this are dropped


def derive_heading(x: float, y: float, noise_floor: float = 0.01) -> float | None:
    """Heading in [0, 360) from the horizontal field components, or None for noise."""
    if abs(x) < noise_floor and abs(y) < noise_floor:
        return None
    return normalize_360(math.degrees(math.atan2(y, x)))


def cardinal_direction(heading: float) -> str:
    """Nearest of the eight compass points."""
    return _CARDINALS[round(normalize_360(heading) / 45.0) % 8]


def format_heading(heading: float) -> str:
    """Display form, e.g. ``58° NE``."""
    return f"{round(normalize_360(heading)) % 360}° {cardinal_direction(heading)}"


class CalibrationWindow:
    """Rolling window of recent headings used as a calibration-quality proxy.

    A steady compass (low spread across the window) is treated as calibrated;
    a jumpy one indicates interference or a sensor that still needs a
    figure-eight. Not thread-safe on its own; the engine serializes access.
    """

    def __init__(self, capacity: int = 10, min_samples: int = 5, threshold_deg: float = 5.0):
        self.capacity = capacity
        self.min_samples = min_samples
        self.threshold_deg = threshold_deg
        self._headings: deque[float] = deque(maxlen=capacity)
        self.is_calibrated = False

    def __len__(self) -> int:
        return len(self._headings)

    def add(self, heading: float) -> CalibrationStatus:
        self._headings.append(heading)
        if len(self._headings) >= self.min_samples:
            spread = self.spread()
            self.is_calibrated = spread is not None and spread < self.threshold_deg
        return self.status()

    def spread(self) -> float | None:
        """Population standard deviation of the stored headings, in degrees.

        Deviations are measured around the circular mean so that a steady
        heading near north (359°, 1°) is not mistaken for a wild one.
        """
        if not self._headings:
            return None
        sin_sum = sum(math.sin(math.radians(h)) for h in self._headings)
        cos_sum = sum(math.cos(math.radians(h)) for h in self._headings)
        mean = math.degrees(math.atan2(sin_sum, cos_sum))
        deviations = [normalize_to_180(h - mean) for h in self._headings]
        return math.sqrt(sum(d * d for d in deviations) / len(deviations))

    @property
    def progress(self) -> float:
        return min(len(self._headings) / self.capacity, 1.0)

    def status(self) -> CalibrationStatus:
        return CalibrationStatus(is_calibrated=self.is_calibrated, progress=self.progress)

    def reset(self) -> None:
        self._headings.clear()
        self.is_calibrated = False


class CompassSession:
    """One live sensor subscription. Use as a context manager or call ``close()``."""

    def __init__(
        self,
        engine: "CompassEngine",
        on_update: HeadingCallback,
        on_reading: ReadingCallback | None = None,
    ):
        self._engine = engine
        self._on_update: HeadingCallback | None = on_update
        self._on_reading = on_reading
        self._subscription: Subscription | None = None
        self.active = False

    def __enter__(self) -> "CompassSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._engine._end_session(self)

    def _deliver(self, sample: MagneticSample) -> None:
        if not self.active:
            return
        reading = self._engine._accept(sample, self)
        if reading is None:
            return
        on_update, on_reading = self._on_update, self._on_reading
        try:
            if on_update is not None:
                on_update(reading.heading, reading.relative_offset)
            if on_reading is not None:
                on_reading(reading)
        except Exception:
            logger.exception("Compass callback failed; stopping session")
            self.close()
            raise

    def _release(self) -> None:
        self.active = False
        self._on_update = None
        self._on_reading = None
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.remove()


class CompassEngine:
    """Turns a magnetometer stream into headings relative to the Qibla.

    One engine owns one calibration window and at most one live session.
    Sensor callbacks may arrive on any thread; all state changes happen
    under the engine lock.

    Args:
        sensor: The platform magnetometer.
        settings: Sampling and threshold constants.
    """

    def __init__(self, sensor: MagnetometerSource, settings: CompassSettings = CompassSettings()):
        self._sensor = sensor
        self.settings = settings
        self._lock = threading.RLock()
        self._window = CalibrationWindow(
            capacity=settings.window_capacity,
            min_samples=settings.min_calibration_samples,
            threshold_deg=settings.calibration_threshold_deg,
        )
        self._qibla: QiblaBearing | None = None
        self._session: CompassSession | None = None
        self._current_heading = 0.0

    # --- Location ---

    def initialize(self, observer: GeoPoint) -> QiblaBearing:
        """Compute and cache the Qibla bearing. Call again when the location changes."""
        qibla = bearing_and_distance(observer)
        with self._lock:
            self._qibla = qibla
        logger.debug("Qibla bearing %.2f° (%.0f km)", qibla.bearing_degrees, qibla.distance_km)
        return qibla

    @property
    def qibla(self) -> QiblaBearing:
        with self._lock:
            if self._qibla is None:
                raise RuntimeError("CompassEngine.initialize() has not been called")
            return self._qibla

    @property
    def qibla_bearing(self) -> float:
        return self.qibla.bearing_degrees

    # --- Streaming ---

    @property
    def is_streaming(self) -> bool:
        with self._lock:
            return self._session is not None

    def start_updates(
        self,
        on_update: HeadingCallback,
        on_reading: ReadingCallback | None = None,
    ) -> CompassSession:
        """Attach to the sensor and report ``on_update(heading, offset)`` per accepted sample.

        Any previous session is stopped first.

        Raises:
            SensorUnavailableError: If the sensor is missing or permission is denied.
            RuntimeError: If ``initialize()`` has not been called.
        """
        with self._lock:
            if self._qibla is None:
                raise RuntimeError("CompassEngine.initialize() has not been called")
        self.stop_updates()
        if not self._sensor.is_available():
            raise SensorUnavailableError("Magnetometer is not available on this device")

        session = CompassSession(self, on_update, on_reading)
        with self._lock:
            self._session = session
            session.active = True
        try:
            subscription = self._sensor.subscribe(session._deliver, self.settings.update_interval_ms)
        except PermissionError as e:
            self._end_session(session)
            raise SensorUnavailableError(f"Magnetometer permission denied: {e}") from e
        except Exception:
            self._end_session(session)
            raise
        with self._lock:
            live = self._session is session
            if live:
                session._subscription = subscription
        if not live:
            # Ended by a sample delivered during subscribe()
            subscription.remove()
            return session
        logger.info("Compass updates started (%d ms interval)", self.settings.update_interval_ms)
        return session

    def stop_updates(self) -> None:
        """Detach from the sensor and clear calibration. No-op when idle."""
        with self._lock:
            session = self._session
        if session is not None:
            self._end_session(session)

    def _end_session(self, session: CompassSession) -> None:
        with self._lock:
            if self._session is not session:
                return
            self._session = None
            self._window.reset()
            session.active = False
        # Outside the lock: removing may join a delivery thread that is waiting on it
        session._release()
        logger.info("Compass updates stopped")

    def _accept(self, sample: MagneticSample, session: CompassSession) -> CompassReading | None:
        with self._lock:
            if self._session is not session:
                return None
            return self.process_sample(sample)

    # --- Per-sample pipeline ---

    def process_sample(self, sample: MagneticSample) -> CompassReading | None:
        """Run one sample through heading, offset, calibration and alignment.

        Returns None (and changes nothing) for a sample below the noise floor.
        """
        heading = derive_heading(sample.x, sample.y, self.settings.noise_floor)
        if heading is None:
            logger.debug("Dropped magnetometer sample below noise floor: %s", sample)
            return None
        with self._lock:
            self._current_heading = heading
            offset = self.relative_offset(heading)
            calibration = self._window.add(heading)
        return CompassReading(
            heading=heading,
            relative_offset=offset,
            calibration=calibration,
            is_aligned=abs(offset) <= self.settings.alignment_threshold_deg,
        )

    def relative_offset(self, heading: float) -> float:
        """Signed rotation in (-180, 180] that brings ``heading`` onto the Qibla."""
        return normalize_to_180(self.qibla_bearing - heading)

    def is_pointing_toward_qibla(self, heading: float) -> bool:
        return abs(self.relative_offset(heading)) <= self.settings.alignment_threshold_deg

    def qibla_accuracy(self, heading: float) -> float:
        """Unsigned angular error from the Qibla, in degrees."""
        return abs(self.relative_offset(heading))

    # --- Calibration ---

    @property
    def current_heading(self) -> float:
        with self._lock:
            return self._current_heading

    @property
    def is_calibrated(self) -> bool:
        with self._lock:
            return self._window.is_calibrated

    def get_calibration_status(self) -> CalibrationStatus:
        with self._lock:
            return self._window.status()

    def reset_calibration(self) -> None:
        with self._lock:
            self._window.reset()
