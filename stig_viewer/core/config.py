"""
STIG Viewer Configuration.

Application configuration and runtime settings.
"""

from __future__ import annotations

import os
import platform
import sys
import tempfile
import threading
from contextlib import suppress
from pathlib import Path
from typing import List, Optional, Tuple

from stig_viewer.core.constants import (
    MAX_FILE_SIZE,
    MAX_RULES,
    MIN_PYTHON_VERSION,
)


class Cfg:
    """
    Application configuration and directory management.

    Provides:
    - Directory management for logs and exports
    - File size and processing limits
    - Location of an optional external CCI→control table

    Directories are resolved lazily by ``init()``; importing the parsers or
    exporters never touches the filesystem.

    Thread-safe: Yes (uses RLock for initialization)
    """

    IS_WIN = platform.system() == "Windows"
    PY_VER = sys.version_info
    MIN_PY = MIN_PYTHON_VERSION

    HOME_ENV = "STIG_VIEWER_HOME"
    CCI_MAP_ENV = "STIG_VIEWER_CCI_MAP"

    # Directory paths (initialized on first use)
    HOME: Optional[Path] = None
    APP_DIR: Optional[Path] = None
    LOG_DIR: Optional[Path] = None
    EXPORT_DIR: Optional[Path] = None

    # Limits and thresholds
    MAX_FILE = MAX_FILE_SIZE
    MAX_RULES = MAX_RULES
    KEEP_LOGS = 5

    _lock = threading.RLock()
    _done = False

    @classmethod
    def cci_map_file(cls) -> Optional[Path]:
        """Path of the JSON CCI table named by the environment, if any."""
        value = os.environ.get(cls.CCI_MAP_ENV, "").strip()
        return Path(value) if value else None

    @classmethod
    def init(cls) -> None:
        """Resolve a writable home directory and create the app directories."""
        with cls._lock:
            if cls._done:
                return

            candidates: List[Path] = []

            override = os.environ.get(cls.HOME_ENV)
            if override:
                candidates.append(Path(override))

            with suppress(Exception):
                candidates.append(Path.home())

            candidates.append(Path(tempfile.gettempdir()) / "stig_viewer_user")

            attempted_paths: List[str] = []
            for candidate in candidates:
                attempted_paths.append(str(candidate))
                try:
                    candidate.mkdir(parents=True, exist_ok=True)
                    tmp = candidate / f".stig_test_{os.getpid()}"
                    tmp.write_text("ok", encoding="utf-8")
                    tmp.unlink()
                    cls.HOME = candidate
                    break
                except OSError:
                    continue

            if not cls.HOME:
                raise RuntimeError(
                    f"Cannot find writable home directory. Tried: {', '.join(attempted_paths)}. "
                    f"Set ${cls.HOME_ENV} to a writable directory."
                )

            cls.APP_DIR = cls.HOME / ".stig_viewer"
            cls.LOG_DIR = cls.APP_DIR / "logs"
            cls.EXPORT_DIR = cls.APP_DIR / "exports"

            for directory in (cls.APP_DIR, cls.LOG_DIR, cls.EXPORT_DIR):
                directory.mkdir(parents=True, exist_ok=True)

            cls._done = True

    @classmethod
    def reset(cls) -> None:
        """Forget resolved directories so the next ``init()`` starts over."""
        with cls._lock:
            cls.HOME = cls.APP_DIR = cls.LOG_DIR = cls.EXPORT_DIR = None
            cls._done = False

    @classmethod
    def check(cls) -> Tuple[bool, List[str]]:
        """Check interpreter version, XML parser and directory permissions."""
        from stig_viewer.core.deps import Deps

        ET, _ = Deps.get_xml()
        errs: List[str] = []

        if cls.PY_VER < cls.MIN_PY:
            errs.append(f"Python {cls.MIN_PY[0]}.{cls.MIN_PY[1]}+ required")

        try:
            ET.fromstring("<test/>")
        except Exception:
            errs.append("XML parser failed")

        cci_file = cls.cci_map_file()
        if cci_file is not None and not cci_file.is_file():
            errs.append(f"CCI map not found: {cci_file}")

        if cls.APP_DIR and not os.access(cls.APP_DIR, os.W_OK):
            errs.append(f"No write permission: {cls.APP_DIR}")

        return len(errs) == 0, errs


# Module-level alias (directories resolved on first init())
CFG = Cfg
