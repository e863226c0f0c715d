from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, List, Optional, Protocol, Union

logger = logging.getLogger(__name__)

TRACE_HEADER = "Elevator Simulation Log"


class TraceSink(Protocol):
    """Append-only destination for per-tick elevator trace lines."""

    def write(self, line: str) -> None:
        ...


class MemoryTraceSink:
    """Keeps trace lines in memory, optionally only the most recent ones."""

    def __init__(self, max_lines: Optional[int] = None) -> None:
        self.max_lines = max_lines
        self.lines: List[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line)
        if self.max_lines is not None and len(self.lines) > self.max_lines:
            del self.lines[: len(self.lines) - self.max_lines]


class FileTraceSink:
    """Writes trace lines to a text file.

    A file that cannot be opened turns the sink into a no-op; the
    simulation runs the same with or without a trace.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._handle: Optional[IO[str]] = None

    def open(self) -> "FileTraceSink":
        try:
            self._handle = self.path.open("w", encoding="utf-8")
            self._handle.write(TRACE_HEADER + "\n")
        except OSError as exc:
            logger.warning("Trace file %s is not writable, tracing disabled: %s", self.path, exc)
            self._handle = None
        return self

    def write(self, line: str) -> None:
        if self._handle is not None:
            self._handle.write(line + "\n")

    def close(self, total_time_steps: Optional[int] = None) -> None:
        if self._handle is None:
            return
        try:
            if total_time_steps is not None:
                self._handle.write(f"Simulation ended. Total time steps: {total_time_steps}\n")
            self._handle.close()
        except OSError as exc:
            logger.warning("Failed to finalize trace file %s: %s", self.path, exc)
        finally:
            self._handle = None

    @property
    def enabled(self) -> bool:
        return self._handle is not None

    def __enter__(self) -> "FileTraceSink":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()
