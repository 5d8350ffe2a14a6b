from pathlib import Path

DEFAULT_STEM = "output"


def file_stem_or_default(path: str) -> str:
    """Base name of ``path`` without its last extension, or ``output``."""
    return Path(path).stem or DEFAULT_STEM


def output_dir_or_cwd(folder: str | None) -> str:
    return folder if folder else "."


def is_asm(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() == ".asm"


def read_full_hex(hex_path: str) -> str:
    """
    Read an Intel HEX file as text, lines joined with ``\\n``.

    Raises OSError when the file cannot be opened.
    """
    with open(hex_path, "r", encoding="utf-8", errors="replace") as f:
        return "\n".join(line.rstrip("\r\n") for line in f)
