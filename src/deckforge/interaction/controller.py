"""Pointer-gesture controller for moving and resizing slide regions.

Bridges a continuous pointer gesture (press, move x N, release) to the pure
drag engine and a single document commit.

State machine:
    IDLE --begin--> ACTIVE --end--> IDLE   (last candidate committed)
                    ACTIVE --cancel--> IDLE (nothing committed)

The rect and pointer position captured at ``begin`` are the fixed basis of
the whole gesture: every move recomputes from the original rect with the
total pointer displacement, never from the previous frame, so rounding
never accumulates. Intermediate frames are published to ``on_frame`` for
rendering but never written to the document.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from deckforge.config import settings
from deckforge.document.store import DocumentStore
from deckforge.geometry.engine import compute_rect
from deckforge.geometry.primitives import EditMode, Point, Rect, Size
from deckforge.layout.defaults import RegionKind, resolve_layout
from deckforge.utils.logging import (
    clear_gesture_context,
    get_logger,
    set_correlation_context,
)

logger = get_logger(__name__)

FrameCallback = Callable[[str, RegionKind, Rect], None]


class GestureState(str, Enum):
    """Controller state."""

    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True)
class ActiveGesture:
    """The fixed basis of an in-progress gesture.

    Attributes:
        gesture_id: Sequence number of the gesture, for log correlation.
        slide_id: Slide whose region is being edited.
        region: Which region of the slide is being edited.
        mode: Move, or resize by a handle.
        start_rect: The region's rect when the gesture began.
        start_pointer: Pointer position when the gesture began.
        container: Size of the tracking surface in pixels.
    """

    gesture_id: int
    slide_id: str
    region: RegionKind
    mode: EditMode
    start_rect: Rect
    start_pointer: Point
    container: Size


@dataclass
class GestureController:
    """Drives one region gesture at a time against a DocumentStore.

    Usage:
        controller = GestureController(store=store)
        controller.begin(slide_id, RegionKind.TEXT, MoveMode(), pointer, container)
        controller.move(Point(x=140, y=95))   # live frame, not committed
        controller.end()                      # commits via update_layout
    """

    store: DocumentStore
    min_size: float = field(default_factory=lambda: settings.MIN_REGION_SIZE)
    on_frame: FrameCallback | None = None

    _active: ActiveGesture | None = field(default=None, init=False, repr=False)
    _live_rect: Rect | None = field(default=None, init=False, repr=False)
    _sequence: itertools.count[int] = field(
        default_factory=lambda: itertools.count(1), init=False, repr=False
    )

    @property
    def state(self) -> GestureState:
        return GestureState.IDLE if self._active is None else GestureState.ACTIVE

    @property
    def active(self) -> ActiveGesture | None:
        return self._active

    @property
    def live_rect(self) -> Rect | None:
        """The most recent uncommitted candidate of the active gesture."""
        return self._live_rect

    def begin(
        self,
        slide_id: str,
        region: RegionKind,
        mode: EditMode,
        pointer: Point,
        container: Size,
    ) -> bool:
        """Start a gesture on a slide region.

        The region's current rect (explicit, or its computed default) and
        the pointer position become the basis for every later frame. A
        gesture already in progress is abandoned first.

        Args:
            slide_id: Slide to edit.
            region: Region of the slide to edit.
            mode: MoveMode, or ResizeMode with a handle.
            pointer: Pointer position at press time, container pixels.
            container: Size of the tracking surface, pixels.

        Returns:
            True if the gesture started; False if the slide does not exist
            or does not display the requested region.
        """
        if self._active is not None:
            logger.warning(
                "Gesture abandoned by a new gesture",
                gesture_id=self._active.gesture_id,
            )
            self.cancel()

        slide = self.store.find_slide(slide_id)
        if slide is None:
            logger.debug("Gesture on unknown slide ignored", slide_id=slide_id)
            return False

        start_rect = resolve_layout(slide).region(region)
        if start_rect is None:
            logger.debug(
                "Gesture on hidden region ignored",
                slide_id=slide_id,
                region=region.value,
            )
            return False

        self._active = ActiveGesture(
            gesture_id=next(self._sequence),
            slide_id=slide_id,
            region=region,
            mode=mode,
            start_rect=start_rect,
            start_pointer=pointer,
            container=container,
        )
        self._live_rect = None
        set_correlation_context(
            slide_id=slide_id, gesture_id=self._active.gesture_id
        )
        logger.debug(
            "Gesture started",
            gesture_id=self._active.gesture_id,
            slide_id=slide_id,
            region=region.value,
            mode=mode.kind,
        )
        return True

    def move(self, pointer: Point) -> Rect | None:
        """Compute and publish the candidate rect for a pointer position.

        Returns:
            The candidate rect, or None when no gesture is active.
        """
        gesture = self._active
        if gesture is None:
            return None

        candidate = compute_rect(
            gesture.start_rect,
            gesture.mode,
            gesture.start_pointer.delta_to(pointer),
            gesture.container,
            min_size=self.min_size,
        )
        self._live_rect = candidate
        if self.on_frame is not None:
            self.on_frame(gesture.slide_id, gesture.region, candidate)
        return candidate

    def end(self, pointer: Point | None = None) -> Rect | None:
        """Finish the gesture and commit its last candidate.

        Args:
            pointer: Release position. When given, a final frame is computed
                from it before committing.

        Returns:
            The committed rect, or None if nothing was committed (no gesture
            was active, or the pointer never moved).
        """
        gesture = self._active
        if gesture is None:
            return None
        if pointer is not None:
            self.move(pointer)

        committed = self._live_rect
        self._active = None
        self._live_rect = None

        if committed is None:
            logger.debug(
                "Gesture ended without movement", gesture_id=gesture.gesture_id
            )
            clear_gesture_context()
            return None

        if gesture.region is RegionKind.TEXT:
            self.store.update_layout(gesture.slide_id, text_region=committed)
        else:
            self.store.update_layout(gesture.slide_id, media_region=committed)
        logger.debug(
            "Gesture committed",
            gesture_id=gesture.gesture_id,
            slide_id=gesture.slide_id,
            rect=committed.to_tuple(),
        )
        clear_gesture_context()
        return committed

    def cancel(self) -> None:
        """Abandon the active gesture; the committed layout is unchanged."""
        if self._active is None:
            return
        logger.debug("Gesture cancelled", gesture_id=self._active.gesture_id)
        self._active = None
        self._live_rect = None
        clear_gesture_context()
