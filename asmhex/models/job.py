# asmhex/models/job.py
from dataclasses import dataclass
from enum import Enum

from ..utils.paths import file_stem_or_default


class BitsMode(Enum):
    BITS16 = "16"
    BITS32 = "32"
    BITS64 = "64"

    @property
    def directive_value(self) -> str:
        return self.value

    @property
    def directive(self) -> str:
        return f"[bits {self.value}]"

    @property
    def label(self) -> str:
        return f"{self.value}-bit"

    @classmethod
    def default(cls) -> "BitsMode":
        return cls.BITS64

    @classmethod
    def from_value(cls, value) -> "BitsMode":
        if isinstance(value, BitsMode):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            raise ValueError(f"unsupported bits mode: {value!r} (expected 16, 32 or 64)") from None


@dataclass(frozen=True)
class ConversionJob:
    source_path: str
    bin_path: str
    hex_path: str

    @classmethod
    def for_source(cls, source_path: str, out_dir: str) -> "ConversionJob":
        stem = file_stem_or_default(source_path)
        return cls(
            source_path=str(source_path),
            bin_path=f"{out_dir}/{stem}.bin",
            hex_path=f"{out_dir}/{stem}.hex",
        )
