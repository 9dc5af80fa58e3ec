"""Asynchronous logging utilities for generation runs."""

from __future__ import annotations

import json
import queue
import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .models import BuildReport


class RunLogger:
    """Records structured events and, given a path, writes them to disk asynchronously.

    Every event is kept in memory (see :attr:`events`). With a ``log_path`` a
    background thread also appends each event as one JSON line, and
    :meth:`close` writes a Markdown summary of the build passes.
    """

    def __init__(self, log_path: Optional[Path] = None, summary_path: Optional[Path] = None) -> None:
        self._log_path = log_path
        self._summary_path = summary_path or (log_path.with_suffix(".md") if log_path else None)
        self._events: list[Dict[str, Any]] = []
        self._pass_records: list[dict[str, Any]] = []
        self._queue: "queue.Queue[Optional[Dict[str, Any]]]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._closed = False
        if log_path is not None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            self._thread = threading.Thread(target=self._worker, args=(log_path,), daemon=True)
            self._thread.start()

    def _worker(self, log_path: Path) -> None:
        with log_path.open("a", encoding="utf8") as fh:
            while True:
                item = self._queue.get()
                if item is None:
                    break
                json.dump(item, fh, sort_keys=True)
                fh.write("\n")
                fh.flush()

    @property
    def events(self) -> list[Dict[str, Any]]:
        return list(self._events)

    @property
    def warnings(self) -> list[str]:
        return [event["message"] for event in self._events if event.get("type") == "warning"]

    def log_event(self, event: Dict[str, Any]) -> None:
        payload = {"timestamp": time.time(), **event}
        self._events.append(payload)
        if self._thread is not None and not self._closed:
            self._queue.put(payload)

    def log_warning(self, message: str, **fields: Any) -> None:
        self.log_event({"type": "warning", "message": message, **fields})

    def log_pass_start(self, run_id: str, strategy: str, config: Dict[str, Any]) -> None:
        self.log_event({"type": "pass_start", "run_id": run_id, "strategy": strategy, "config": config})

    def log_pass_end(self, report: BuildReport) -> None:
        stats = report.stats
        self.log_event(
            {
                "type": "pass_end",
                "run_id": report.run_id,
                "strategy": report.strategy,
                "stats": stats.to_dict(),
                "diagnostics": list(report.diagnostics),
            }
        )
        self._pass_records.append(
            {
                "run_id": report.run_id,
                "strategy": report.strategy,
                "columns": stats.columns,
                "blocks": stats.blocks,
                "duration_ns": stats.duration_ns,
            }
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._thread is not None:
            self._queue.put(None)
            self._thread.join(timeout=2)
        self._write_summary()

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _write_summary(self) -> None:
        if not self._pass_records or self._summary_path is None:
            return
        total_duration = sum(record["duration_ns"] for record in self._pass_records)
        total_blocks = sum(record["blocks"] for record in self._pass_records)
        lines = ["# World Generation Summary", "", f"- Total passes: {len(self._pass_records)}"]
        lines.append(f"- Total duration (ms): {total_duration / 1e6:.2f}")
        lines.append(f"- Blocks placed: {total_blocks}")
        lines.append(f"- Warnings: {len(self.warnings)}")
        lines.append("")
        lines.append("| Run | Strategy | Columns | Blocks | Duration (ms) |")
        lines.append("| --- | --- | ---: | ---: | ---: |")
        for record in self._pass_records:
            duration_ms = record["duration_ns"] / 1e6
            lines.append(
                f"| {record['run_id']} | {record['strategy']} | {record['columns']} "
                f"| {record['blocks']} | {duration_ms:.2f} |"
            )
        self._summary_path.parent.mkdir(parents=True, exist_ok=True)
        self._summary_path.write_text("\n".join(lines), encoding="utf8")


__all__ = ["RunLogger"]
