"""The frame loop: timing, input delivery and per-frame hooks."""

from __future__ import annotations

import time
from typing import Callable, Optional

from tankduel.input import InputController, InputState


class World(InputController):
    """A scene that is updated once per frame.

    Subclasses override :meth:`init`, :meth:`frame_start`, :meth:`update`
    and :meth:`frame_end`, and the input handlers they need.
    """

    def __init__(self, input_state: Optional[InputState] = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__(input_state if input_state is not None else InputState())
        self._clock = clock
        self._start = clock()
        self.previous_time = 0.0
        self.elapsed_time = 0.0
        self.delta_time = 0.0
        self.paused = False
        self.should_close = False
        self.frame_started_at = 0.0
        self.frame_work_time = 0.0

    def init(self) -> None:
        """Set the scene up before the first frame."""

    def frame_start(self) -> None:
        """Called at the start of each frame; notes when the frame's work began."""
        self.frame_started_at = self._clock() - self._start

    def update(self, delta_time: float) -> None:
        """Advance the scene by ``delta_time`` seconds."""

    def frame_end(self) -> None:
        """Called at the end of each frame; notes how long the frame's work took."""
        self.frame_work_time = (self._clock() - self._start) - self.frame_started_at

    @property
    def last_frame_time(self) -> float:
        """Duration of the last frame in seconds."""
        return self.delta_time

    def _compute_frame_delta_time(self) -> None:
        self.elapsed_time = self._clock() - self._start
        self.delta_time = self.elapsed_time - self.previous_time
        self.previous_time = self.elapsed_time

    def tick(self) -> None:
        """Run one frame: timing, input, then the frame hooks."""
        self._compute_frame_delta_time()
        self.input_state.dispatch(self.delta_time)
        self.frame_start()
        self.update(float(self.delta_time))
        self.frame_end()

    def run(self, should_close: Optional[Callable[[], bool]] = None) -> None:
        """Run frames until :meth:`exit` is called or ``should_close`` says so."""
        while not self.should_close and not (should_close is not None and should_close()):
            self.tick()

    def pause(self) -> None:
        """Toggle the paused flag."""
        self.paused = not self.paused

    def exit(self) -> None:
        """Ask the frame loop to stop."""
        self.should_close = True