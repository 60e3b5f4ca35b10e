"""Client – UI state machine for the snake detector.

``SnakeDetector`` owns the one state value the interface renders.  Image
captures and analysis round trips are the only things that move it:

    Idle ──capture──▶ ImageSelected ──submit──▶ Analyzing ──▶ Result
                                                          ├──▶ NotSnake
                                                          └──▶ Error

A successful capture from any state returns to ``ImageSelected``.  Each
capture starts a new selection; an analysis still running for an older
selection is cancelled, and if it completes anyway its outcome is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from src.app.client.api import AnalysisClient
from src.app.client.capture import CaptureSource, CapturedImage, FileHandle, capture_image
from src.app.client.state import (
    Analyzing,
    Error,
    Idle,
    ImageSelected,
    NotSnake,
    Result,
    UIState,
    held_image,
)
from src.app.config import GENERIC_FAILURE_MESSAGE
from src.app.errors import InvalidFileType, ReadError
from src.app.services.response_parser import parse_response

logger = logging.getLogger(__name__)

Listener = Callable[[UIState], None]


class SnakeDetector:

    def __init__(self, client: AnalysisClient) -> None:
        self._client = client
        self._state: UIState = Idle()
        self._selection = 0
        self._task: asyncio.Task | None = None
        self._listeners: list[Listener] = []

    # ── observation ──
    @property
    def state(self) -> UIState:
        return self._state

    @property
    def can_submit(self) -> bool:
        """True when an image is held and no analysis is in flight."""
        return held_image(self._state) is not None and not isinstance(self._state, Analyzing)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* on every state change; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: UIState) -> None:
        logger.debug("State %s → %s", type(self._state).__name__, type(state).__name__)
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    # ── image capture ──
    async def select_image(
        self,
        file: FileHandle,
        mime_type: str | None = None,
        *,
        source: CaptureSource = CaptureSource.PICKER,
    ) -> UIState:
        """Capture *file*; on success drop every previous outcome.

        The selection starts before the file is read, so a capture started
        later wins even when an earlier one finishes reading after it.
        """
        token = self._supersede()
        try:
            image = await capture_image(file, mime_type, source=source)
        except (InvalidFileType, ReadError) as exc:
            if token != self._selection:
                logger.info("Discarding failure of a superseded capture.")
                return self._state
            previous = held_image(self._state)
            self._supersede()
            self._set_state(Error(previous, _describe(exc), exc))
            return self._state

        if token != self._selection:
            logger.info("Discarding superseded capture of %s.", image.filename or image.mime_type)
            return self._state
        # an analysis submitted while the file was being read is stale too
        self._supersede()
        self._set_state(ImageSelected(image))
        return self._state

    def _supersede(self) -> int:
        self._selection += 1
        if self._task is not None and not self._task.done():
            logger.info("New selection – cancelling outstanding analysis.")
            self._task.cancel()
        self._task = None
        return self._selection

    # ── analysis ──
    def submit(self) -> asyncio.Task | None:
        """Start analysing the held image.

        Returns the running task, or ``None`` (without touching the state or
        the network) when there is no image or an analysis is in flight.
        """
        if not self.can_submit:
            logger.debug("Submit ignored in state %s", type(self._state).__name__)
            return None

        image = held_image(self._state)
        self._set_state(Analyzing(image))
        self._task = asyncio.create_task(self._run(image, self._selection))
        return self._task

    async def analyze(self) -> UIState:
        """Submit and wait for the outcome."""
        task = self.submit()
        if task is not None:
            await asyncio.wait([task])
        return self._state

    async def _run(self, image: CapturedImage, selection: int) -> None:
        try:
            envelope = await self._client.analyze(image.data_uri)
            outcome = parse_response(
                envelope.content, envelope.is_snake_image, self._client.schema_version,
            )
        except Exception as exc:
            logger.exception("Analysis error")
            next_state: UIState = Error(image, _describe(exc), exc)
        else:
            if isinstance(outcome, str):
                next_state = NotSnake(image, outcome)
            else:
                next_state = Result(image, outcome)

        if selection != self._selection:
            logger.info("Discarding outcome of a superseded analysis.")
            return
        self._set_state(next_state)

    async def aclose(self) -> None:
        self._supersede()
        await self._client.aclose()


def _describe(exc: Exception) -> str:
    """First line of the failure's message; details stay on ``Error.cause``."""
    lines = str(exc).strip().splitlines()
    return lines[0] if lines else GENERIC_FAILURE_MESSAGE
