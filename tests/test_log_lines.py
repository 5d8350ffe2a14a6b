import logging

from asmhex.parsers.log_lines import (
    Severity, classify_line, classify_text, error_line, info_line, success_line, warning_line,
)


def test_markers_map_to_severity():
    assert classify_line(error_line("NASM Error:")) is Severity.ERROR
    assert classify_line(success_line("Success! HEX saved at x.hex")) is Severity.SUCCESS
    assert classify_line(warning_line("Could not read x")) is Severity.WARNING
    assert classify_line(info_line("Inserted [bits 64] into x")) is Severity.INFO
    assert classify_line("🔍 Processing a.asm") is Severity.INFO


def test_plain_words_also_classify():
    assert classify_line("objcopy Error") is Severity.ERROR
    assert classify_line("Success") is Severity.SUCCESS


def test_error_beats_success():
    assert classify_line("❌ Success path missing") is Severity.ERROR


def test_classify_text_keeps_line_order():
    text = "🔍 Processing a.asm\n❌ NASM Error:\n✅ Success! HEX saved at b.hex\n"
    assert [s for s, _ in classify_text(text)] == [Severity.INFO, Severity.ERROR, Severity.SUCCESS]


def test_log_levels():
    assert Severity.ERROR.log_level == logging.ERROR
    assert Severity.WARNING.log_level == logging.WARNING
    assert Severity.SUCCESS.log_level == logging.INFO
