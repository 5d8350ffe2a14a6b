import pytest

from asmhex.models.job import BitsMode, ConversionJob


def test_bits_directive_text():
    assert [m.directive_value for m in BitsMode] == ["16", "32", "64"]
    assert BitsMode.BITS32.directive == "[bits 32]"
    assert BitsMode.default() is BitsMode.BITS64


@pytest.mark.parametrize("raw, mode", [(16, BitsMode.BITS16), ("32", BitsMode.BITS32), (" 64 ", BitsMode.BITS64)])
def test_bits_from_value(raw, mode):
    assert BitsMode.from_value(raw) is mode


def test_bits_from_value_rejects_other_widths():
    with pytest.raises(ValueError):
        BitsMode.from_value(8)


def test_derived_paths():
    job = ConversionJob.for_source("/src/foo.asm", "/out")
    assert job.bin_path == "/out/foo.bin"
    assert job.hex_path == "/out/foo.hex"
    assert job.source_path == "/src/foo.asm"


def test_only_last_extension_stripped():
    job = ConversionJob.for_source("boot.stage1.asm", "o")
    assert job.hex_path == "o/boot.stage1.hex"


def test_missing_stem_falls_back_to_output():
    job = ConversionJob.for_source("", "/out")
    assert job.bin_path == "/out/output.bin"
    assert job.hex_path == "/out/output.hex"


def test_job_is_immutable():
    job = ConversionJob.for_source("a.asm", ".")
    with pytest.raises(AttributeError):
        job.hex_path = "x"
