"""Client – the closed set of UI states.

Each state carries exactly the data the interface needs to render it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from src.app.client.capture import CapturedImage
from src.app.schemas.result import AnalysisResult


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class ImageSelected:
    image: CapturedImage


@dataclass(frozen=True)
class Analyzing:
    image: CapturedImage


@dataclass(frozen=True)
class Result:
    image: CapturedImage
    result: AnalysisResult


@dataclass(frozen=True)
class NotSnake:
    image: CapturedImage
    message: str


@dataclass(frozen=True)
class Error:
    image: CapturedImage | None
    message: str
    cause: Exception | None = None


UIState = Union[Idle, ImageSelected, Analyzing, Result, NotSnake, Error]


def held_image(state: UIState) -> CapturedImage | None:
    """Return the image a state holds, if any."""
    return getattr(state, "image", None)
