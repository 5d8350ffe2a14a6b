import subprocess

import pytest

from asmhex.models.state import BatchState
from asmhex.workers import converter

HEX_TEXT = ":0100000090 6F\n:00000001FF\n"


class FakeTools:
    """Stands in for nasm/objcopy; records every command line it sees."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.fail: dict[str, tuple[int, str]] = {}   # tool name -> (rc, stderr)
        self.missing: set[str] = set()
        self.hang: set[str] = set()
        self.fail_sources: dict[str, str] = {}       # source path -> nasm stderr
        self.skip_hex = False                         # objcopy exits 0 without writing

    def tool_name(self, exe: str) -> str:
        return "nasm" if "nasm" in exe else "objcopy"

    def __call__(self, cmd, **kw):
        self.calls.append(list(cmd))
        name = self.tool_name(cmd[0])
        if name in self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        if name in self.hang:
            raise subprocess.TimeoutExpired(cmd, kw.get("timeout"))
        if name == "nasm" and cmd[3] in self.fail_sources:
            return subprocess.CompletedProcess(cmd, 1, "", self.fail_sources[cmd[3]])
        if name in self.fail:
            rc, err = self.fail[name]
            return subprocess.CompletedProcess(cmd, rc, "", err)
        if name == "nasm":
            with open(cmd[5], "wb") as f:
                f.write(b"\x90")
        elif not self.skip_hex:
            with open(cmd[6], "w") as f:
                f.write(HEX_TEXT)
        return subprocess.CompletedProcess(cmd, 0, "", "")


@pytest.fixture
def tools(monkeypatch):
    fake = FakeTools()
    monkeypatch.setattr(converter.subprocess, "run", fake)
    return fake


@pytest.fixture
def state():
    return BatchState()


@pytest.fixture
def settings():
    return {"nasm_path": "nasm", "objcopy_path": "objcopy", "tool_timeout": 5}


@pytest.fixture
def asm_file(tmp_path):
    def make(name="prog.asm", text="mov ax, 1\n"):
        p = tmp_path / "src" / name
        p.parent.mkdir(exist_ok=True)
        p.write_text(text)
        return p
    return make


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / "out"
    d.mkdir()
    return str(d)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication
    return QCoreApplication.instance() or QCoreApplication([])
