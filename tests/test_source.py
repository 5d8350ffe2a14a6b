from asmhex.models.job import BitsMode
from asmhex.utils.source import InsertOutcome, has_bits_directive, maybe_insert_bits


def test_inserts_directive_as_first_line(asm_file):
    p = asm_file(text="mov ax, 1\n")
    outcome, err = maybe_insert_bits(str(p), BitsMode.BITS16)
    assert outcome is InsertOutcome.INSERTED and err is None
    assert p.read_text() == "[bits 16]\nmov ax, 1\n"


def test_second_call_is_a_no_op(asm_file):
    p = asm_file(text="nop\n")
    maybe_insert_bits(str(p), BitsMode.BITS64)
    first = p.read_bytes()
    outcome, _ = maybe_insert_bits(str(p), BitsMode.BITS64)
    assert outcome is InsertOutcome.ALREADY_PRESENT
    assert p.read_bytes() == first


def test_existing_directive_anywhere_leaves_file_untouched(asm_file):
    raw = b"; header\r\nmov eax, 1\r\n; see [bits 32] below\r\n"
    p = asm_file()
    p.write_bytes(raw)
    outcome, _ = maybe_insert_bits(str(p), BitsMode.BITS64)
    assert outcome is InsertOutcome.ALREADY_PRESENT
    assert p.read_bytes() == raw


def test_match_is_case_sensitive():
    assert has_bits_directive("bits 64\n")
    assert has_bits_directive("[bits 16]")
    assert not has_bits_directive("[BITS 16]\n")
    assert not has_bits_directive("BITS 32")


def test_crlf_content_preserved(asm_file):
    p = asm_file()
    p.write_bytes(b"nop\r\nret\r\n")
    maybe_insert_bits(str(p), BitsMode.BITS32)
    assert p.read_bytes() == b"[bits 32]\nnop\r\nret\r\n"


def test_unreadable_file_reports_read_failure(tmp_path):
    outcome, err = maybe_insert_bits(str(tmp_path / "missing.asm"), BitsMode.BITS64)
    assert outcome is InsertOutcome.READ_FAILED
    assert isinstance(err, OSError)


def test_non_utf8_file_reports_read_failure(asm_file):
    p = asm_file()
    p.write_bytes(b"\xff\xfe\x00mov")
    outcome, err = maybe_insert_bits(str(p), BitsMode.BITS64)
    assert outcome is InsertOutcome.READ_FAILED
    assert "UTF-8" in str(err)


def test_write_failure_reports_and_leaves_file(asm_file, monkeypatch):
    from asmhex.utils import source

    real_open = open

    def read_only_open(path, mode="r", *a, **kw):
        if "w" in mode:
            raise PermissionError(13, "Permission denied", str(path))
        return real_open(path, mode, *a, **kw)

    monkeypatch.setattr(source, "open", read_only_open, raising=False)
    p = asm_file(text="nop\n")
    outcome, err = maybe_insert_bits(str(p), BitsMode.BITS32)
    assert outcome is InsertOutcome.WRITE_FAILED
    assert isinstance(err, PermissionError)
    assert p.read_text() == "nop\n"
