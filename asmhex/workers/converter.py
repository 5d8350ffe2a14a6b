# asmhex/workers/converter.py
import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..models.job import BitsMode, ConversionJob
from ..models.state import BatchState
from ..parsers.log_lines import (
    START_MARK, classify_line, error_line, info_line, success_line, warning_line,
)
from ..utils.paths import read_full_hex
from ..utils.source import InsertOutcome, maybe_insert_bits

logger = logging.getLogger(__name__)


class ConversionFailure(Exception):
    """Base for every error that stops a single job."""


class ToolLaunchError(ConversionFailure):
    pass


class ToolTimeoutError(ConversionFailure):
    pass


class ToolExitError(ConversionFailure):
    def __init__(self, title: str, returncode: int, stderr: str):
        super().__init__(f"{title} (exit status {returncode})")
        self.title = title
        self.returncode = returncode
        self.stderr = stderr


class AssemblyError(ToolExitError):
    pass


class ConversionError(ToolExitError):
    pass


@dataclass
class ConversionResult:
    job: ConversionJob
    ok: bool
    error: ConversionFailure | None = None


def assembler_args(exe: str, job: ConversionJob) -> list[str]:
    return [exe, "-f", "bin", job.source_path, "-o", job.bin_path]


def objcopy_args(exe: str, job: ConversionJob) -> list[str]:
    return [exe, "-I", "binary", "-O", "ihex", job.bin_path, job.hex_path]


class ToolInvoker:
    """Runs nasm then objcopy for one job, writing progress into a BatchState."""

    def __init__(self, state: BatchState, settings: dict):
        self.state = state
        self.settings = settings

    @property
    def timeout(self) -> float | None:
        t = self.settings.get("tool_timeout")
        return float(t) if t else None

    def emit(self, text: str):
        self.state.append(text)
        for line in text.splitlines():
            logger.log(classify_line(line).log_level, "%s", line)

    def convert(self, job: ConversionJob, bits_mode: BitsMode, auto_insert: bool) -> ConversionResult:
        self.state.begin_job()
        self.emit(f"{START_MARK} Processing {job.source_path}")

        if auto_insert:
            self._insert_bits(job.source_path, bits_mode)

        try:
            Path(job.bin_path).parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.emit(warning_line(f"Could not create output folder: {e}"))

        try:
            self._run_tool("nasm", self.settings.get("nasm_path") or "nasm",
                           assembler_args, job, AssemblyError, "NASM Error")
            self._run_tool("objcopy", self.settings.get("objcopy_path") or "objcopy",
                           objcopy_args, job, ConversionError, "objcopy Error")
        except ConversionFailure as e:
            self.emit(self._describe(e))
            return ConversionResult(job, False, e)

        self.emit(success_line(f"Success! HEX saved at {job.hex_path}"))
        self.state.set_latest_output(job.hex_path)
        try:
            self.state.set_preview(read_full_hex(job.hex_path))
        except OSError as e:
            self.emit(warning_line(f"Could not read {job.hex_path}: {e}"))
        return ConversionResult(job, True)

    def _insert_bits(self, path: str, bits_mode: BitsMode):
        outcome, err = maybe_insert_bits(path, bits_mode)
        if outcome is InsertOutcome.INSERTED:
            self.emit(info_line(f"Inserted {bits_mode.directive} into {path}"))
        elif outcome is InsertOutcome.ALREADY_PRESENT:
            self.emit(info_line(f"Bits directive already present in {path}"))
        elif outcome is InsertOutcome.READ_FAILED:
            self.emit(warning_line(f"Could not read {path}: {err}"))
        else:
            self.emit(warning_line(f"Could not insert {bits_mode.directive}: {err}"))

    def _run_tool(self, name: str, exe: str, build_args, job: ConversionJob, exit_error, title: str):
        cmd = build_args(exe, job)
        logger.debug("$ %s", " ".join(shlex.quote(c) for c in cmd))
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise ToolTimeoutError(f"Error: {name} timed out after {self.timeout:g}s.") from None
        except OSError as e:
            raise ToolLaunchError(f"Error: Could not run {name} ({e}).") from e
        if proc.returncode != 0:
            raise exit_error(title, proc.returncode, proc.stderr or "")
        return proc

    @staticmethod
    def _describe(err: ConversionFailure) -> str:
        if not isinstance(err, ToolExitError):
            return error_line(str(err))
        if not err.stderr.strip():
            return error_line(str(err))
        # stderr follows the marked header verbatim, first line on the header line.
        return f"{error_line(err.title + ':')} {err.stderr}"
