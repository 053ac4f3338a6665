"""Detection of BDD test runners that report on their own.

When a BDD runner drives the session, it already reports scenarios and steps
to the Agent, so automatic test and command reports must be turned off to
avoid duplicates. The caller can state the runner explicitly with a
:class:`RunnerContext`; otherwise :class:`FrameworkDetector` walks the call
stack once and looks for a registered runner marker.

A frame matches when its module name, the qualified name of its declaring
class (or any base class), or one of the class's declared markers matches a
registered pattern. Classes declare markers with :func:`runner_marker`.
"""

from __future__ import annotations

import enum
import inspect
import logging
import re
import sys
from types import FrameType
from typing import Any, Callable, Iterable, Iterator, TypeVar

logger = logging.getLogger("agentbridge.reporting.framework")

T = TypeVar("T", bound=type)


class RunnerContext(str, enum.Enum):
    NONE = "none"
    CUCUMBER = "cucumber"
    BEHAVE = "behave"
    PYTEST_BDD = "pytest-bdd"
    RADISH = "radish"
    UNKNOWN_BDD = "bdd"

    @property
    def is_known_runner(self) -> bool:
        return self is not RunnerContext.NONE


class FrameworkDetectionError(Exception):
    """A frame's declaring module could not be resolved."""

    pass


_RUNNER_MARKERS: list[tuple[re.Pattern[str], RunnerContext]] = [
    (re.compile(r"io\.cucumber\.\w+\.CucumberOptions"), RunnerContext.CUCUMBER),
    (re.compile(r"behave(\.\w+)*"), RunnerContext.BEHAVE),
    (re.compile(r"pytest_bdd(\.\w+)*"), RunnerContext.PYTEST_BDD),
    (re.compile(r"radish(\.\w+)*"), RunnerContext.RADISH),
]


def register_runner_marker(pattern: str, context: RunnerContext = RunnerContext.UNKNOWN_BDD) -> None:
    """Register an additional marker pattern (full match) for a known runner."""
    _RUNNER_MARKERS.append((re.compile(pattern), context))


def runner_marker(*names: str) -> Callable[[T], T]:
    """Class decorator declaring runner markers, e.g. ``@runner_marker("io.cucumber.junit.CucumberOptions")``."""

    def decorate(cls: T) -> T:
        existing = tuple(cls.__dict__.get("__runner_markers__", ()))
        cls.__runner_markers__ = existing + names
        return cls

    return decorate


def live_frames() -> Iterator[FrameType]:
    """Yield the caller's frame and every frame above it, innermost first."""
    frame = inspect.currentframe()
    # Skip live_frames itself
    frame = frame.f_back if frame is not None else None
    while frame is not None:
        yield frame
        frame = frame.f_back


def _declaring_class(frame: Any) -> type | None:
    f_locals = getattr(frame, "f_locals", None) or {}
    owner = f_locals.get("self")
    if owner is not None:
        return type(owner)
    cls = f_locals.get("cls")
    if isinstance(cls, type):
        return cls
    return None


def _class_names(cls: type) -> Iterator[str]:
    yield from cls.__dict__.get("__runner_markers__", ())
    for klass in cls.__mro__:
        yield f"{klass.__module__}.{klass.__qualname__}"


class FrameworkDetector:
    """Looks for a known BDD runner on the call stack."""

    def __init__(self, markers: Iterable[tuple[re.Pattern[str], RunnerContext]] | None = None) -> None:
        self._markers = list(markers) if markers is not None else None

    def detect(self, frames: Iterable[Any] | None = None) -> RunnerContext:
        """Return the first runner found on ``frames`` (the live stack by default).

        Frames without a module name (code run through ``exec`` into a bare
        namespace, as behave does for hooks and step files) are skipped. If a
        named module cannot be resolved the walk stops and RunnerContext.NONE
        is returned: an unproven runner is treated as absent.
        """
        if frames is None:
            frames = live_frames()
        try:
            for frame in frames:
                context = self._match_frame(frame)
                if context is not RunnerContext.NONE:
                    logger.debug("Detected %s runner on the call stack", context.value)
                    return context
        except FrameworkDetectionError as exc:
            logger.error("Unable to find calling module while looking for a BDD runner: %s", exc)
            return RunnerContext.NONE
        return RunnerContext.NONE

    def is_known_runner(self, frames: Iterable[Any] | None = None) -> bool:
        return self.detect(frames).is_known_runner

    def _match_frame(self, frame: Any) -> RunnerContext:
        module_name = (getattr(frame, "f_globals", None) or {}).get("__name__")
        if module_name is not None:
            if module_name not in sys.modules:
                raise FrameworkDetectionError(f"module {module_name!r} is not loaded")
            context = self._match(module_name)
            if context is not RunnerContext.NONE:
                return context

        cls = _declaring_class(frame)
        if cls is None:
            return RunnerContext.NONE
        for name in _class_names(cls):
            context = self._match(name)
            if context is not RunnerContext.NONE:
                return context
        return RunnerContext.NONE

    def _match(self, name: str) -> RunnerContext:
        markers = self._markers if self._markers is not None else _RUNNER_MARKERS
        for pattern, context in markers:
            if pattern.fullmatch(name):
                return context
        return RunnerContext.NONE
