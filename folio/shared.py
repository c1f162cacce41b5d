import hashlib
import re
from enum import Enum


class Color(str, Enum):
    SUCCESS = "\033[92m"
    ERROR = "\033[91m"
    INFO = "\033[94m"
    WARNING = "\033[93m"
    RESET = "\033[0m"


def colored(text: str, color: Color) -> str:
    return f"{color.value}{text}{Color.RESET.value}"


def echo(text: str, color: Color = Color.INFO) -> None:
    print(colored(text, color))


class InvalidPaperSizeError(ValueError):
    def __init__(self, size_str: str):
        super().__init__(
            f"Invalid paper size: {size_str}. Valid sizes: {[s.name for s in PaperSize]}"
        )


class ThemeNotFoundError(ValueError):
    def __init__(self, name: str, available: list[str]):
        super().__init__(f"Unknown theme: {name}. Available themes: {available}")


class InvalidResumeError(ValueError):
    def __init__(self, details: list[str]):
        self.details = details
        super().__init__("Invalid resume record:\n  " + "\n  ".join(details))


class FontNotFoundError(Exception):
    def __init__(self, font_name: str, step: str = "lookup"):
        super().__init__(f"Font not found: {font_name} ({step})")


class FontDownloadError(Exception):
    def __init__(self, font_name: str, reason: str):
        super().__init__(f"Failed to download font {font_name}: {reason}")


class FontLoadError(Exception):
    def __init__(self, font_name: str, reason: str):
        super().__init__(f"Unable to load font program {font_name}: {reason}")


class CacheWriteError(Exception):
    def __init__(self, key: str, reason: str):
        super().__init__(f"Could not write font cache entry {key}: {reason}")


class PaperSize(Enum):
    A4 = (595, 842)
    LETTER = (612, 792)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]

    @staticmethod
    def from_string(size_str: str) -> "PaperSize":
        try:
            return PaperSize[size_str.upper()]
        except KeyError as exc:
            raise InvalidPaperSizeError(size_str) from exc


def slugify(name: str) -> str:
    """Lowercase a display name into a file- and key-safe slug."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def hash_bytes(data: bytes, algorithm: str = "sha256") -> str:
    hash_func = hashlib.new(algorithm)
    hash_func.update(data)
    return hash_func.hexdigest()


def hash_charset(chars: set[str] | frozenset[str], length: int = 16) -> str:
    """Deterministic digest of a character set, independent of iteration order."""
    joined = "".join(sorted(chars))
    return hash_bytes(joined.encode("utf-8"))[:length]
