"""Reporter: call-scoped accumulator for the failure explanation.

Every aggregation and hint opens a frame before its children run and closes
it afterwards, so frames are strictly nested. Children append text to the
innermost frame only when their status explains the failure: a FAIL
normally, a SUCCESS under an odd number of enclosing NOTs. A frame whose own
status explains nothing is discarded on close, which drops the text of
siblings that an OR or an ANY made irrelevant.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from valence.reporting.formatter import Formatter
from valence.validation.aggregation import AggregationDescriptor, AggregationKind
from valence.validation.presentation import HintPresentation, LeafPresentation
from valence.validation.status import Status


@dataclass(slots=True)
class _Frame:
    descriptor: AggregationDescriptor | None
    hint: str | None
    single: bool
    negated: bool
    parts: list[str] = field(default_factory=list)


def _explains(status: Status, negated: bool) -> bool:
    return status is (Status.SUCCESS if negated else Status.FAIL)


class Reporter:
    """Builds one report. Not reusable across calls."""
    __slots__ = ("_formatter", "_stack", "_parts")

    def __init__(self, formatter: Formatter):
        self._formatter = formatter
        self._stack: list[_Frame] = []
        self._parts: list[str] = []

    @property
    def formatter(self) -> Formatter: return self._formatter

    @property
    def depth(self) -> int: return len(self._stack)

    @property
    def result(self) -> str: return " ".join(self._parts)

    # ------------------------------------------------------------------
    # Adapter hooks
    # ------------------------------------------------------------------

    def before(self, presentation: Any) -> None:
        if isinstance(presentation, AggregationDescriptor):
            self.aggregate_open(presentation)
        elif isinstance(presentation, HintPresentation):
            self._push(None, presentation.text)

    def after(self, status: Status, presentation: Any) -> None:
        if isinstance(presentation, LeafPresentation):
            if _explains(status, self._negated()):
                self._append(self._formatter.leaf(presentation))
        elif isinstance(presentation, (AggregationDescriptor, HintPresentation)):
            self.aggregate_close(status)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def aggregate_open(self, descriptor: AggregationDescriptor) -> None:
        self._push(descriptor, None)

    def aggregate_close(self, status: Status) -> None:
        frame = self._stack.pop()
        if _explains(status, self._negated()) and (text := self._render(frame)):
            self._append(text)

    def _push(self, descriptor: AggregationDescriptor | None, hint: str | None) -> None:
        negated = self._negated() ^ (descriptor is not None and descriptor.kind is AggregationKind.NOT)
        self._stack.append(_Frame(descriptor, hint, single=not self._stack, negated=negated))

    def _negated(self) -> bool: return self._stack[-1].negated if self._stack else False

    def _append(self, text: str) -> None:
        (self._stack[-1].parts if self._stack else self._parts).append(text)

    def _render(self, frame: _Frame) -> str:
        if frame.hint is not None:
            return self._formatter.token(frame.hint)
        descriptor = frame.descriptor
        parts = list(dict.fromkeys(frame.parts)) if descriptor.element_wise else frame.parts
        if not parts:
            return ""
        wrapped = not frame.single and len(parts) > 1
        text = self._formatter.token(descriptor.conjunction).join(parts)
        if wrapped or descriptor.always_open:
            text = self._formatter.token(descriptor.open_token) + text
        if wrapped:
            text += self._formatter.token(descriptor.close_token)
        return text
