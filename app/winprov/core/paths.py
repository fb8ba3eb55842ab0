"""Application path management for winprov.

This module provides standardized paths for configuration and state
storage. On Windows the roaming and local application data folders
are used; elsewhere the XDG Base Directory Specification applies.

Defaults:
- Config: %APPDATA%\\winprov\\ (or ~/.config/winprov/)
- State: %LOCALAPPDATA%\\winprov\\ (or ~/.local/state/winprov/)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "winprov"


def _get_app_dir(windows_var: str, xdg_var: str, default_subdir: str) -> Path:
    """Get an application directory respecting environment variable overrides.

    The Windows variable wins when present, then the XDG variable,
    then the default subdirectory under the user's home.

    Args:
        windows_var: Windows known-folder variable (e.g., "APPDATA").
        xdg_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    for env_var in (windows_var, xdg_var):
        base = os.environ.get(env_var)
        if base:
            return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to %APPDATA%/winprov (or XDG_CONFIG_HOME/winprov, ~/.config/winprov).
    """
    return _get_app_dir("APPDATA", "XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the history file and link backups that should
    persist between runs but are not configuration.

    Returns:
        Path to %LOCALAPPDATA%/winprov (or XDG_STATE_HOME/winprov,
        ~/.local/state/winprov).
    """
    return _get_app_dir("LOCALAPPDATA", "XDG_STATE_HOME", ".local/state")


def get_manifest_path() -> Path:
    """Get the default manifest file path.

    Returns:
        Path to <config>/provision.toml.
    """
    return get_config_dir() / "provision.toml"


def get_history_path() -> Path:
    """Get the history file path.

    Returns:
        Path to <state>/history.jsonl.
    """
    return get_state_dir() / "history.jsonl"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to <config>/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_link_backup_dir() -> Path:
    """Get the link backup directory path.

    Files and directories replaced by links during an overwrite are
    moved here, one timestamped subdirectory per batch.

    Returns:
        Path to <state>/link-backups.
    """
    return get_state_dir() / "link-backups"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Returns:
        Path to the state directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")


def ensure_link_backup_dir() -> Path:
    """Create the link backup directory if it doesn't exist.

    Returns:
        Path to the link backup directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_link_backup_dir(), "link backup")
