"""
File operations module.

Provides atomic writes, size-limited reads with encoding detection, and a
retry decorator for transient filesystem errors.
"""

from __future__ import annotations

import codecs
import functools
import os
import tempfile
import time
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Generator, IO, Optional, Tuple, Union

from stig_viewer.core.config import Cfg
from stig_viewer.core.constants import (
    ENCODINGS,
    LARGE_FILE_THRESHOLD,
    MAX_RETRIES,
    RETRY_DELAY,
)
from stig_viewer.core.logging import LOG
from stig_viewer.exceptions import FileError

_UTF16_BOMS = (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)


# ──────────────────────────────────────────────────────────────────────────────
# RETRY DECORATOR
# ──────────────────────────────────────────────────────────────────────────────

def retry(
    attempts: int = MAX_RETRIES,
    delay: float = RETRY_DELAY,
    exceptions: Tuple[type, ...] = (IOError, OSError),
):
    """Retry decorator with exponential backoff."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            wait = delay
            last_err: Optional[BaseException] = None
            for attempt in range(1, attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as err:
                    last_err = err
                    if attempt < attempts:
                        LOG.d(f"{func.__name__} failed (attempt {attempt}/{attempts}): {err}")
                        time.sleep(wait)
                        wait *= 2
            if last_err:
                raise last_err
            raise RuntimeError("Retry failed without captured exception")

        return wrapper

    return decorator


@retry()
def _replace(src: Path, target: Path) -> None:
    src.replace(target)


# ──────────────────────────────────────────────────────────────────────────────
# FILE OPERATIONS CLASS
# ──────────────────────────────────────────────────────────────────────────────

class FO:
    """Safe file operations with atomic writes and encoding detection."""

    @staticmethod
    def _existing_file(path: Union[str, Path]) -> Path:
        path = Path(path)
        if not path.exists():
            raise FileError("File not found", {"file": str(path)})
        if not path.is_file():
            raise FileError("Not a file", {"file": str(path)})
        return path

    @staticmethod
    def decode(data: bytes, name: str = "<bytes>") -> str:
        """Decode raw document bytes.

        UTF-16 is used only when the data starts with a UTF-16 byte order
        mark; otherwise ``ENCODINGS`` are tried in order. A leading BOM is
        removed from the result.

        Raises:
            FileError: If the data cannot be decoded with any known encoding
        """
        if data.startswith(_UTF16_BOMS):
            candidates = ["utf-16"]
        else:
            candidates = [enc for enc in ENCODINGS if enc != "utf-16"]

        for encoding in candidates:
            try:
                text = data.decode(encoding, errors="strict")
            except (UnicodeDecodeError, UnicodeError):
                continue
            if encoding != candidates[0]:
                LOG.d(f"Decoded {name} as {encoding}")
            return text[1:] if text.startswith("\ufeff") else text

        raise FileError("Unable to decode file with any known encoding", {"file": name})

    @staticmethod
    def read(path: Union[str, Path]) -> str:
        """Read a document with automatic encoding detection.

        Args:
            path: File path to read

        Returns:
            File contents as string

        Raises:
            FileError: If the file is missing, larger than ``Cfg.MAX_FILE``,
                unreadable, or cannot be decoded
        """
        path = FO._existing_file(path)
        size = path.stat().st_size
        if size > Cfg.MAX_FILE:
            raise FileError(
                f"File too large: {size} bytes (max: {Cfg.MAX_FILE})",
                {"file": str(path)},
            )
        if size > LARGE_FILE_THRESHOLD:
            LOG.w(f"Large file ({size / 1024 / 1024:.1f}MB), parsing may be slow")

        try:
            data = path.read_bytes()
        except OSError as exc:
            raise FileError(f"Cannot read file: {exc}", {"file": str(path)}) from exc

        LOG.d(f"Read {size} bytes from {path}")
        return FO.decode(data, str(path))

    @staticmethod
    @contextmanager
    def atomic(target: Union[str, Path], mode: str = "w", enc: str = "utf-8") -> Generator[IO, None, None]:
        """Atomic file write.

        Content goes to a temp file beside ``target`` which replaces the
        target only after the block completes; on failure the target is
        left untouched.

        Args:
            target: Target file path
            mode: File mode (w, wb)
            enc: Encoding for text mode

        Yields:
            File handle for writing

        Raises:
            FileError: On write failure
        """
        target = Path(target)
        tmp_path: Optional[Path] = None

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(target.parent),
                prefix=f".stig_tmp_{os.getpid()}_",
                suffix=".tmp",
                text="b" not in mode,
            )
            tmp_path = Path(tmp_name)

            if "b" in mode:
                fh = os.fdopen(fd, mode)
            else:
                fh = os.fdopen(fd, mode, encoding=enc, newline="\n")

            with fh:
                yield fh
                fh.flush()
                if not Cfg.IS_WIN:
                    os.fsync(fh.fileno())

            _replace(tmp_path, target)
            tmp_path = None
            LOG.d(f"Wrote {target}")
        except OSError as exc:
            raise FileError(f"Atomic write failed: {exc}", {"file": str(target)}) from exc
        finally:
            if tmp_path is not None and tmp_path.exists():
                with suppress(OSError):
                    tmp_path.unlink()

    @staticmethod
    def write_text(target: Union[str, Path], text: str) -> Path:
        """Atomically write ``text`` to ``target``."""
        with FO.atomic(target) as fh:
            fh.write(text)
        return Path(target)


__all__ = ["FO", "retry"]
