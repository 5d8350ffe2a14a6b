# asmhex/workers/batch.py
import logging

from PySide6.QtCore import QObject, QThread, Qt, Signal, Slot

from ..models.job import BitsMode, ConversionJob
from ..models.state import BatchState
from ..parsers.log_lines import error_line, warning_line
from .converter import ConversionResult, ToolInvoker

logger = logging.getLogger(__name__)


class BatchWorker(QObject):
    job_started = Signal(int, str)      # index, source path
    job_done = Signal(int, bool)        # index, ok
    progress = Signal(float)
    finished = Signal(int, int)         # ok count, total

    def __init__(self, state: BatchState, settings: dict):
        super().__init__()
        self.state = state
        self.settings = settings
        self.jobs: list[ConversionJob] = []
        self.bits_mode = BitsMode.default()
        self.auto_insert = True
        self.results: list[ConversionResult] = []
        self._stop = False

    def stop(self):
        """Skip the jobs that have not started yet; the running one completes."""
        self._stop = True

    def set_jobs(self, jobs: list[ConversionJob], bits_mode: BitsMode, auto_insert: bool):
        self.jobs = list(jobs)
        self.bits_mode = bits_mode
        self.auto_insert = auto_insert

    @Slot()
    def run(self):
        invoker = ToolInvoker(self.state, self.settings)
        total = len(self.jobs)
        self.results = []
        self.state.begin_batch(total)
        logger.info("Starting batch of %d file(s), bits=%s, auto-insert=%s",
                    total, self.bits_mode.directive_value, self.auto_insert)

        for idx, job in enumerate(self.jobs):
            if self._stop:
                self.state.append(warning_line(f"Batch stopped, {total - idx} file(s) skipped."))
                logger.warning("Batch stopped with %d file(s) left", total - idx)
                break
            self.job_started.emit(idx, job.source_path)
            try:
                result = invoker.convert(job, self.bits_mode, self.auto_insert)
            except Exception as e:
                logger.exception("Unexpected failure converting %s", job.source_path)
                invoker.emit(error_line(f"Error: {e}"))
                result = ConversionResult(job, False)
            self.results.append(result)
            self.state.job_finished()
            self.job_done.emit(idx, result.ok)
            self.progress.emit(self.state.progress)

        self.state.finish_batch()
        self.progress.emit(1.0)
        ok = sum(1 for r in self.results if r.ok)
        logger.info("Batch finished: %d/%d succeeded", ok, total)
        self.finished.emit(ok, total)


class BatchController(QObject):
    """
    Owns the worker thread for one batch at a time.

    start() refuses to launch while a batch is still running and never
    starts a thread for an empty file list.
    """

    batch_started = Signal(int)
    batch_finished = Signal(int, int)

    def __init__(self, state: BatchState, settings: dict, parent=None):
        super().__init__(parent)
        self.state = state
        self.settings = settings
        self.worker: BatchWorker | None = None
        self.thread: QThread | None = None

    def is_running(self) -> bool:
        return self.thread is not None and self.thread.isRunning()

    def start(self, sources: list[str], out_dir: str, bits_mode: BitsMode, auto_insert: bool) -> bool:
        if not sources:
            return False
        if self.is_running():
            logger.warning("Convert requested while a batch is running; ignored")
            return False

        jobs = [ConversionJob.for_source(s, out_dir) for s in sources]

        worker = BatchWorker(self.state, self.settings)
        worker.set_jobs(jobs, bits_mode, auto_insert)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        # QThread.quit is thread-safe; call it straight from the worker thread.
        worker.finished.connect(thread.quit, Qt.ConnectionType.DirectConnection)
        worker.finished.connect(self.batch_finished)

        self.worker, self.thread = worker, thread
        thread.start()
        self.batch_started.emit(len(jobs))
        return True

    def wait(self, msecs: int | None = None) -> bool:
        if self.thread is None:
            return True
        if msecs is None:
            return self.thread.wait()
        return self.thread.wait(msecs)

    def shutdown(self, msecs: int = 3000):
        """
        Stop after the job in flight and block until the thread has exited.

        A tool call cannot be interrupted, so the wait is bounded by the
        tool timeout rather than by msecs.
        """
        if not self.is_running():
            return
        self.worker.stop()
        self.thread.quit()
        if not self.thread.wait(msecs):
            logger.warning("Waiting for the current tool call to finish before exit")
            self.thread.wait()
