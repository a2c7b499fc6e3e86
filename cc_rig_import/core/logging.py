"""Import pass log: messages tagged with the pass step that produced them."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List

ERROR_LEVELS = ("ERROR", "CRITICAL")
DEFAULT_STEP = "import"


@dataclass(frozen=True)
class LogRecord:
    level: str
    step: str   # classify, retarget, lod, clips, ...
    text: str


class ImportLogger:
    """
    Collects the messages of one import pass for the report dialog.

    Messages are tagged with the current step (see `step()`), so the report
    can show what classification, retargeting, LOD grouping and clip
    normalization each had to say. Everything is also forwarded to the
    "cc_rig_import" stdlib logger, prefixed with asset and step.
    """

    def __init__(self, max_messages: int = 500, asset: str = ""):
        self.max_messages = max_messages
        self.asset = asset
        self.records: List[LogRecord] = []
        self.dropped = 0
        self._step = DEFAULT_STEP
        self._logger = logging.getLogger("cc_rig_import")

    @contextmanager
    def step(self, name: str) -> Iterator["ImportLogger"]:
        """Tag messages logged inside the block with `name`."""
        outer = self._step
        self._step = name
        try:
            yield self
        finally:
            self._step = outer

    def info(self, msg: str) -> None:
        self._add("INFO", msg)

    def warning(self, msg: str) -> None:
        self._add("WARNING", msg)

    def error(self, msg: str) -> None:
        self._add("ERROR", msg)

    def critical(self, msg: str) -> None:
        self._add("CRITICAL", msg)

    def _add(self, level: str, text: str) -> None:
        record = LogRecord(level, self._step, text)
        if len(self.records) < self.max_messages:
            self.records.append(record)
        else:
            self.dropped += 1

        where = f"{self.asset}/{record.step}" if self.asset else record.step
        self._logger.log(getattr(logging, level), "[%s] %s", where, text)

    # -- queries used by operators and the report dialog --

    def messages_at(self, *levels: str) -> List[str]:
        return [r.text for r in self.records if r.level in levels]

    def count(self, *levels: str) -> int:
        return sum(1 for r in self.records if r.level in levels)

    @property
    def has_errors(self) -> bool:
        return self.count(*ERROR_LEVELS) > 0

    @property
    def error_count(self) -> int:
        return self.count(*ERROR_LEVELS)

    @property
    def warning_count(self) -> int:
        return self.count("WARNING")

    def by_step(self, *levels: str) -> Dict[str, List[str]]:
        """Message texts per step, steps in first-logged order."""
        grouped: Dict[str, List[str]] = {}
        for r in self.records:
            if not levels or r.level in levels:
                grouped.setdefault(r.step, []).append(r.text)
        return grouped

    def report_lines(self, *levels: str, limit: int = 20, newest: bool = False) -> List[str]:
        """
        At most `limit` "step: text" lines of the given levels, oldest first
        (or the newest ones), plus a trailing "... and N more" line.
        """
        lines = [f"{r.step}: {r.text}" for r in self.records if r.level in levels]
        if len(lines) <= limit:
            return lines
        shown = lines[-limit:] if newest else lines[:limit]
        return shown + [f"... and {len(lines) - limit} more"]

    def step_summary(self, *levels: str) -> str:
        """'classify 2, lod 1' style count of messages per step."""
        return ", ".join(f"{step} {len(texts)}"
                         for step, texts in self.by_step(*levels).items())

    def clear(self) -> None:
        self.records.clear()
        self.dropped = 0
