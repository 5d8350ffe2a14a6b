# asmhex/utils/source.py
from enum import Enum

_DIRECTIVE_HINTS = ("[bits", "bits ")


class InsertOutcome(Enum):
    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"
    READ_FAILED = "read_failed"
    WRITE_FAILED = "write_failed"


def has_bits_directive(text: str) -> bool:
    # Plain substring check: a match inside a comment or string counts too.
    return any(h in text for h in _DIRECTIVE_HINTS)


def maybe_insert_bits(path: str, mode) -> tuple[InsertOutcome, OSError | None]:
    """
    Prefix ``path`` with ``[bits N]`` for ``mode`` unless a bits directive is
    already there. The file is rewritten in place.

    Returns the outcome and, for the two failure outcomes, the error.
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as e:
        if isinstance(e, UnicodeDecodeError):
            e = OSError(f"not valid UTF-8 text ({e.reason})")
        return InsertOutcome.READ_FAILED, e

    if has_bits_directive(data):
        return InsertOutcome.ALREADY_PRESENT, None

    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(f"{mode.directive}\n{data}")
    except OSError as e:
        return InsertOutcome.WRITE_FAILED, e
    return InsertOutcome.INSERTED, None
