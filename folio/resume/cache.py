"""On-disk cache for resolved font programs.

Entries are keyed by (family, weight, charset hash or "full") and never
invalidated: a key fully determines the bytes stored under it.
"""

import os
import shutil
import tempfile
from pathlib import Path

from folio.shared import CacheWriteError, Color, echo, hash_charset, slugify


FOLIO_FONTS_DIR = Path.home() / ".folio" / "fonts"
CACHE_SUFFIX = ".font"


class FontCache:
    """Content-addressed store of font program bytes."""

    def __init__(self, root: Path | str = FOLIO_FONTS_DIR, verbose: bool = False):
        self.root = Path(root)
        self.verbose = verbose

    @staticmethod
    def key(family: str, weight: str, charset: frozenset[str] | None = None) -> str:
        qualifier = hash_charset(charset) if charset else "full"
        return f"{slugify(family)}-{slugify(weight)}-{qualifier}"

    def path_for(self, key: str) -> Path:
        return self.root / f"{key}{CACHE_SUFFIX}"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            data = path.read_bytes()
        except OSError:
            return None
        return data or None

    def put(self, key: str, data: bytes) -> bool:
        """Store ``data`` under ``key``; returns False if it could not be persisted."""
        try:
            self._write(key, data)
        except CacheWriteError as e:
            echo(str(e), Color.WARNING)
            return False

        if self.verbose:
            echo(f"Cached font {key} ({len(data) // 1024}KB)", Color.INFO)
        return True

    def _write(self, key: str, data: bytes) -> None:
        tmp_name = None
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", dir=self.root)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, self.path_for(key))
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise CacheWriteError(key, str(e)) from e

    def entries(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob(f"*{CACHE_SUFFIX}"))

    def clear(self) -> int:
        """Remove the whole cache directory; returns the number of entries dropped."""
        count = len(self.entries())
        if self.root.exists():
            shutil.rmtree(self.root)
        return count
