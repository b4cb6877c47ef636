from __future__ import annotations
import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Iterator, Optional

from w1temp.config import Overflow, Unit
from w1temp.errors import ReadFailure
from w1temp.sensors import SensorHandle, TemperatureSensor, W1ThermSensor

_PUT_POLL_S = 0.1
_GET_POLL_S = 0.1


@dataclass(frozen=True)
class ChangeEvent:
    value: float
    unit: Unit
    at: float


class Watcher:
    """
    Polls a sensor on a fixed cadence and publishes changes and failures on two queues.

    Timing
    - First read happens one full interval after start(); no immediate read.
    - Deadlines are fixed (start + n*interval on the monotonic clock). Ticks missed
      while the loop was blocked are skipped, not replayed.

    Output
    - changes(): ChangeEvent, only when the value differs from the last emitted one.
    - errors(): ReadFailure instances (IOFailure / NotReady / MalformedData).
    - One tick puts at most one item on exactly one of the two queues.

    Backpressure (per queue, queue_size items each)
    - block: the loop waits for a consumer. A consumer that only drains one queue
      can stall the loop once the other fills up.
    - drop_oldest / drop_newest: never waits; the dropped item is logged.

    Lifecycle
    - start() once; stop() is honored at the next tick boundary or while waiting
      to emit. A stopped watcher cannot be restarted, build a new one.
    """

    def __init__(self,
                 sensor: TemperatureSensor,
                 interval: float,
                 queue_size: int = 16,
                 overflow: Overflow = "block"):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval!r}")
        if queue_size < 1:
            raise ValueError(f"queue_size must be >= 1, got {queue_size!r}")
        if overflow not in ("block", "drop_oldest", "drop_newest"):
            raise ValueError(f"unknown overflow policy: {overflow!r}")
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.sensor = sensor
        self.interval = float(interval)
        self.overflow = overflow
        self._changes: queue.Queue[ChangeEvent] = queue.Queue(maxsize=queue_size)
        self._errors: queue.Queue[ReadFailure] = queue.Queue(maxsize=queue_size)
        self._last: Optional[float] = None  # None = nothing emitted yet
        self._stop = threading.Event()
        self._done = threading.Event()
        self._thread: threading.Thread | None = None
        self._log.debug("Watcher init sensor=%r interval=%.3fs queue_size=%d overflow=%s",
                        sensor, self.interval, queue_size, overflow)

    @property
    def last_value(self) -> Optional[float]:
        return self._last

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._done.is_set()

    # lifecycle
    def start(self) -> "Watcher":
        if self._thread is not None or self._stop.is_set():
            raise RuntimeError("Watcher cannot be restarted; create a new one")
        self._thread = threading.Thread(target=self._run, name="w1temp-watcher", daemon=True)
        self._thread.start()
        self._log.info("Started watching %r every %.3fs", self.sensor, self.interval)
        return self

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is None:
            self._done.set()
            return
        if self._thread is not threading.current_thread():
            self._thread.join(timeout)
            if self._thread.is_alive():
                self._log.warning("Watcher for %r still running after %ss", self.sensor, timeout)
                return
        self._log.info("Stopped watching %r", self.sensor)

    def __enter__(self) -> "Watcher":
        return self.start()

    def __exit__(self, *exc) -> None:
        self.stop()

    # one tick
    def poll_once(self) -> bool:
        """
        Read the sensor once and publish the outcome.
        Returns True when something was queued, False for a repeated value or a dropped item.
        """
        try:
            value = self.sensor.read()
        except ReadFailure as e:
            self._log.debug("Read failed: %s: %s", type(e).__name__, e)
            return self._emit(self._errors, e)
        if self._last is not None and value == self._last:
            return False
        # only delivered values count as last seen
        if not self._emit(self._changes, ChangeEvent(value=value, unit=self.sensor.unit, at=time.time())):
            return False
        self._last = value
        return True

    def _emit(self, q: queue.Queue, item) -> bool:
        if self.overflow == "block":
            while not self._stop.is_set():
                try:
                    q.put(item, timeout=_PUT_POLL_S)
                    return True
                except queue.Full:
                    continue
            return False
        try:
            q.put_nowait(item)
            return True
        except queue.Full:
            pass
        if self.overflow == "drop_newest":
            self._log.warning("Queue full, dropping new item %r", item)
            return False
        try:
            dropped = q.get_nowait()
            self._log.warning("Queue full, dropping oldest item %r", dropped)
        except queue.Empty:
            pass
        try:
            q.put_nowait(item)
            return True
        except queue.Full:
            self._log.warning("Queue still full, dropping new item %r", item)
            return False

    def _run(self) -> None:
        next_at = time.monotonic() + self.interval
        try:
            while not self._stop.wait(max(0.0, next_at - time.monotonic())):
                self.poll_once()
                next_at += self.interval
                now = time.monotonic()
                if next_at <= now:
                    skipped = int((now - next_at) // self.interval) + 1
                    next_at += skipped * self.interval
                    self._log.debug("Loop fell behind, skipped %d tick(s)", skipped)
        except Exception:
            self._log.exception("Watch loop crashed")
        finally:
            self._done.set()

    # consumer side
    def get_change(self, block: bool = True, timeout: float | None = None) -> ChangeEvent:
        return self._changes.get(block, timeout)

    def get_error(self, block: bool = True, timeout: float | None = None) -> ReadFailure:
        return self._errors.get(block, timeout)

    def changes(self) -> Iterator[ChangeEvent]:
        return self._drain(self._changes)

    def errors(self) -> Iterator[ReadFailure]:
        return self._drain(self._errors)

    def _drain(self, q: queue.Queue) -> Iterator:
        while True:
            try:
                yield q.get(timeout=_GET_POLL_S)
            except queue.Empty:
                # no puts happen after _done, so empty() is final here
                if self._done.is_set() and q.empty():
                    return


def watch(handle: SensorHandle,
          interval: float,
          unit: Unit = "F",
          queue_size: int = 16,
          overflow: Overflow = "block") -> Watcher:
    """Start watching one w1 sensor file; returns the running Watcher."""
    return Watcher(W1ThermSensor(handle, unit), interval, queue_size=queue_size, overflow=overflow).start()
