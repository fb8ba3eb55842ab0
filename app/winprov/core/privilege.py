"""Administrator privilege detection."""

import ctypes
import os


def is_elevated() -> bool:
    """Check whether the current process runs with administrator rights.

    Uses ``IsUserAnAdmin`` on Windows and the effective user id elsewhere.

    Returns:
        True if elevated, False otherwise (including when the check fails).
    """
    if os.name == "nt":
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except (AttributeError, OSError):
            return False
    return os.geteuid() == 0
