"""Keyboard and mouse state, and delivery of input events to controllers.

Events arrive one at a time through the ``*_callback`` methods. They are
buffered and then sent to every subscribed :class:`InputController` once per
frame by :meth:`InputState.dispatch`.
"""

from __future__ import annotations

from collections import Counter
from enum import IntEnum, IntFlag
from typing import List, Optional, Set, Tuple

from tankduel.mathutils import clear_bit, is_bit_set, set_bit


class Key(IntEnum):
    """Keyboard key codes used by the game."""

    SPACE = 32
    A = 65
    C = 67
    D = 68
    E = 69
    Q = 81
    S = 83
    W = 87
    ESCAPE = 256
    ENTER = 257
    RIGHT = 262
    LEFT = 263
    DOWN = 264
    UP = 265
    F3 = 292
    F5 = 294


class MouseButton(IntEnum):
    """Mouse button numbers; they are also bit positions in button masks."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class Mod(IntFlag):
    """Modifier keys held alongside a key or mouse event."""

    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4
    SUPER = 8


class Action(IntEnum):
    """What happened to a key or button."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class InputController:
    """Receives input events. Subclasses override the handlers they need.

    The default handlers count the events that reach them in
    :attr:`unhandled`, so it shows which events no subclass dealt with.
    """

    def __init__(self, input_state: Optional["InputState"] = None) -> None:
        self.input_state = input_state
        self.unhandled: Counter = Counter()
        self._active = False
        if input_state is not None:
            input_state.subscribe(self)
            self._active = True

    @property
    def active(self) -> bool:
        """Whether the controller is subscribed to its input state."""
        return self._active

    @active.setter
    def active(self, value: bool) -> None:
        self._active = bool(value)
        if self.input_state is None:
            return
        if value:
            self.input_state.subscribe(self)
        else:
            self.input_state.unsubscribe(self)

    def _record_unhandled(self, event: str) -> None:
        self.unhandled[event] += 1

    def on_input_update(self, delta_time: float, mods: int) -> None:
        """Called every frame, after all other events of the frame."""
        self._record_unhandled("input_update")

    def on_key_press(self, key: int, mods: int) -> None:
        """Called when a key goes down."""
        self._record_unhandled("key_press")

    def on_key_release(self, key: int, mods: int) -> None:
        """Called when a key goes up."""
        self._record_unhandled("key_release")

    def on_mouse_move(self, mouse_x: int, mouse_y: int, delta_x: int, delta_y: int) -> None:
        """Called when the pointer moved during the frame."""
        self._record_unhandled("mouse_move")

    def on_mouse_btn_press(self, mouse_x: int, mouse_y: int, button: int, mods: int) -> None:
        """Called with a bit mask of the buttons pressed during the frame."""
        self._record_unhandled("mouse_btn_press")

    def on_mouse_btn_release(self, mouse_x: int, mouse_y: int, button: int, mods: int) -> None:
        """Called with a bit mask of the buttons released during the frame."""
        self._record_unhandled("mouse_btn_release")

    def on_mouse_scroll(self, mouse_x: int, mouse_y: int, offset_x: int, offset_y: int) -> None:
        """Called when the wheel scrolled during the frame."""
        self._record_unhandled("mouse_scroll")

    def on_window_resize(self, width: int, height: int) -> None:
        """Called when the window size changed during the frame."""
        self._record_unhandled("window_resize")


class InputState:
    """Buffered input and window size state shared by all controllers."""

    def __init__(self, resolution: Tuple[int, int] = (1280, 720),
                 scale_factor: float = 1.0) -> None:
        width, height = resolution
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid resolution: {resolution}")
        self.resolution: Tuple[int, int] = (int(width), int(height))
        self.scale_factor = float(scale_factor)
        self.aspect_ratio = width / height
        self.cursor_pos: Tuple[int, int] = (self.resolution[0] // 2, self.resolution[1] // 2)
        self.key_mods = 0
        self.observers: List[InputController] = []

        self._held_keys: Set[int] = set()
        self._key_events: List[int] = []
        self._mouse_button_action = 0
        self._mouse_button_states = 0
        self._mouse_move_event = False
        self._mouse_delta = (0, 0)
        self._scroll_event = False
        self._scroll_delta = (0, 0)
        self._resize_event = False

    # Subscriptions

    def subscribe(self, controller: InputController) -> None:
        """Start delivering events to ``controller``."""
        if not any(o is controller for o in self.observers):
            self.observers.append(controller)

    def unsubscribe(self, controller: InputController) -> None:
        """Stop delivering events to ``controller``."""
        self.observers = [o for o in self.observers if o is not controller]

    # Raw events

    def key_callback(self, key: int, action: int, mods: int) -> None:
        """Record a key event; repeated reports of the same state are ignored."""
        self.key_mods = mods
        pressed = bool(action)
        if (key in self._held_keys) == pressed:
            return
        if pressed:
            self._held_keys.add(key)
        else:
            self._held_keys.discard(key)
        self._key_events.append(key)

    def mouse_button_callback(self, button: int, action: int, mods: int) -> None:
        """Record a mouse button event."""
        self.key_mods = mods
        self._mouse_button_action = set_bit(self._mouse_button_action, button)
        if action:
            self._mouse_button_states = set_bit(self._mouse_button_states, button)
        else:
            self._mouse_button_states = clear_bit(self._mouse_button_states, button)

    def mouse_move(self, pos_x: int, pos_y: int) -> None:
        """Record a pointer move, accumulating the offset within a frame."""
        dx = pos_x - self.cursor_pos[0]
        dy = pos_y - self.cursor_pos[1]
        if self._mouse_move_event:
            self._mouse_delta = (self._mouse_delta[0] + dx, self._mouse_delta[1] + dy)
        else:
            self._mouse_move_event = True
            self._mouse_delta = (dx, dy)
        self.cursor_pos = (pos_x, pos_y)

    def mouse_scroll(self, offset_x: float, offset_y: float) -> None:
        """Record a scroll; offsets are truncated to whole steps."""
        self._scroll_event = True
        self._scroll_delta = (int(offset_x), int(offset_y))

    def set_size(self, width: int, height: int) -> None:
        """Record a new window size."""
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid window size: {width}x{height}")
        self.resolution = (int(width), int(height))
        self.aspect_ratio = width / height
        self._resize_event = True

    # Queries

    def key_hold(self, key: int) -> bool:
        """Whether ``key`` is currently down."""
        return key in self._held_keys

    def mouse_hold(self, button: int) -> bool:
        """Whether mouse ``button`` is currently down."""
        return is_bit_set(self._mouse_button_states, button)

    def get_resolution(self, unscaled: bool = False) -> Tuple[int, int]:
        """The window resolution, multiplied by the scale factor unless ``unscaled``."""
        if unscaled:
            return self.resolution
        return (int(self.resolution[0] * self.scale_factor),
                int(self.resolution[1] * self.scale_factor))

    # Delivery

    def dispatch(self, delta_time: float) -> None:
        """Send the frame's buffered events to every controller, then reset them."""
        observers = list(self.observers)
        x, y = self.cursor_pos

        if self._resize_event:
            self._resize_event = False
            for obs in observers:
                obs.on_window_resize(*self.resolution)

        if self._mouse_move_event:
            self._mouse_move_event = False
            for obs in observers:
                obs.on_mouse_move(x, y, *self._mouse_delta)

        press = self._mouse_button_action & self._mouse_button_states
        if press:
            for obs in observers:
                obs.on_mouse_btn_press(x, y, press, self.key_mods)

        release = self._mouse_button_action & ~self._mouse_button_states
        if release:
            for obs in observers:
                obs.on_mouse_btn_release(x, y, release, self.key_mods)

        if self._scroll_event:
            self._scroll_event = False
            for obs in observers:
                obs.on_mouse_scroll(x, y, *self._scroll_delta)

        events, self._key_events = self._key_events, []
        for key in events:
            for obs in observers:
                if self.key_hold(key):
                    obs.on_key_press(key, self.key_mods)
                else:
                    obs.on_key_release(key, self.key_mods)

        for obs in observers:
            obs.on_input_update(float(delta_time), self.key_mods)

        self._mouse_button_action = 0