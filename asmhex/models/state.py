# asmhex/models/state.py
import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class StateSnapshot:
    log: str
    progress: float
    latest_output_path: str | None
    preview_text: str
    jobs_total: int
    jobs_done: int

    @property
    def in_flight(self) -> bool:
        return 0.0 < self.progress < 1.0


class BatchState:
    """
    Log, progress and preview shared between a batch worker and the display.

    The worker thread writes, the display reads via snapshot(). Every field
    group is guarded by one lock; nothing here blocks on I/O while holding it.
    The log is a list of per-job segments: begin_job() opens a fresh segment
    so each job starts with an empty log of its own, and log_text() joins the
    segments of the current batch in order.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._segments: list[str] = []
        self._progress = 0.0
        self._latest: str | None = None
        self._preview = ""
        self._total = 0
        self._done = 0

    # --- log ---
    def begin_job(self, header: str = "") -> int:
        with self._lock:
            self._segments.append(header + "\n" if header else "")
            return len(self._segments) - 1

    def append(self, text: str):
        if not text.endswith("\n"):
            text += "\n"
        with self._lock:
            if not self._segments:
                self._segments.append("")
            self._segments[-1] += text

    def job_log(self, index: int) -> str:
        with self._lock:
            return self._segments[index]

    def job_logs(self) -> list[str]:
        with self._lock:
            return list(self._segments)

    def log_text(self) -> str:
        with self._lock:
            return "".join(self._segments)

    def clear_log(self):
        with self._lock:
            self._segments.clear()

    # --- progress ---
    def begin_batch(self, total: int):
        with self._lock:
            self._segments.clear()
            self._progress = 0.0
            self._total = total
            self._done = 0

    def job_finished(self):
        with self._lock:
            self._done += 1
            if self._total:
                self._set_progress_locked(self._done / self._total)

    def set_progress(self, value: float):
        with self._lock:
            self._set_progress_locked(value)

    def _set_progress_locked(self, value: float):
        value = min(1.0, max(0.0, float(value)))
        if value > self._progress:
            self._progress = value

    def finish_batch(self):
        with self._lock:
            self._progress = 1.0

    @property
    def progress(self) -> float:
        with self._lock:
            return self._progress

    # --- output / preview ---
    @property
    def latest_output_path(self) -> str | None:
        with self._lock:
            return self._latest

    def set_latest_output(self, path: str):
        with self._lock:
            self._latest = path

    @property
    def preview_text(self) -> str:
        with self._lock:
            return self._preview

    def set_preview(self, text: str):
        with self._lock:
            self._preview = text

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            return StateSnapshot(
                log="".join(self._segments),
                progress=self._progress,
                latest_output_path=self._latest,
                preview_text=self._preview,
                jobs_total=self._total,
                jobs_done=self._done,
            )
