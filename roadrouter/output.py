"""Sinks that serialised output is written to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, MutableSequence


class OutputSink(ABC):
    """Receives characters one at a time or in runs."""

    @abstractmethod
    def write_character(self, c: Any) -> None:
        """Write a single character."""

    @abstractmethod
    def write_characters(self, s: Any) -> None:
        """Write a run of characters."""


class ListSink(OutputSink):
    """Appends to a mutable sequence such as a list or bytearray."""

    def __init__(self, target: MutableSequence) -> None:
        self.target = target

    def write_character(self, c: Any) -> None:
        self.target.append(c)

    def write_characters(self, s: Any) -> None:
        self.target.extend(s)


class StreamSink(OutputSink):
    """Writes to a file-like object."""

    def __init__(self, stream: Any) -> None:
        self.stream = stream

    def write_character(self, c: Any) -> None:
        self.stream.write(c)

    def write_characters(self, s: Any) -> None:
        self.stream.write(s)


class StringSink(OutputSink):
    """Collects text in memory."""

    def __init__(self, initial: str = "") -> None:
        self._parts: list[str] = [initial] if initial else []

    def write_character(self, c: str) -> None:
        self._parts.append(c)

    def write_characters(self, s: str) -> None:
        self._parts.append(s)

    def getvalue(self) -> str:
        return "".join(self._parts)


def output_adapter(target: Any) -> OutputSink:
    """Choose the sink that suits ``target``."""
    if isinstance(target, OutputSink):
        return target
    if isinstance(target, str):
        return StringSink(target)
    if isinstance(target, (list, bytearray)):
        return ListSink(target)
    if hasattr(target, "write"):
        return StreamSink(target)
    raise TypeError(f"cannot write output to {type(target).__name__}")