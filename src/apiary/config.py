"""Configuration directory, application secrets and atomic writes.

Every generated CLI keeps its state in one directory, by default
``~/.google-service-cli``:

* ``<api>-secret.json`` -- the OAuth client registration
  (:class:`~apiary.models.ConsoleApplicationSecret` layout). A missing file
  is created from the CLI's built-in template so the user has something to
  edit.
* ``<api>/tokens.json`` -- tokens granted by the installed-application flow
  (see :class:`~apiary.auth.token_store.TokenStore`).

Precedence for the directory is ``--config-dir`` > ``$APIARY_CONFIG_DIR`` >
the default. Setting ``$APIARY_ACCESS_TOKEN`` bypasses the OAuth flow.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from apiary.exceptions import ConfigError
from apiary.exit_codes import EXIT_CONFIG_DIR, EXIT_CONFIG_SECRET
from apiary.models import ApplicationSecret, ConsoleApplicationSecret

DEFAULT_CONFIG_DIR = "~/.google-service-cli"
CONFIG_DIR_ENV = "APIARY_CONFIG_DIR"
ACCESS_TOKEN_ENV = "APIARY_ACCESS_TOKEN"


# --- Directory resolution ---


def resolve_config_dir(cli_value: Optional[str], default: str = DEFAULT_CONFIG_DIR) -> str:
    """Pick the config directory from the flag, the environment, or *default*."""
    if cli_value:
        return cli_value
    return os.environ.get(CONFIG_DIR_ENV) or default


def assure_config_dir_exists(dir: str) -> Path:
    """Expand ``~`` in *dir* and create the directory if needed.

    Returns:
        The expanded path.

    Raises:
        ConfigError: With exit code :data:`~apiary.exit_codes.EXIT_CONFIG_DIR`
            when the path is empty or cannot be created.
    """
    if not dir.strip():
        raise ConfigError("The configuration directory is unset", EXIT_CONFIG_DIR)
    path = Path(dir).expanduser()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(
            f"Directory '{path}' could not be created: {exc}", EXIT_CONFIG_DIR
        ) from exc
    return path


def access_token_from_env() -> Optional[str]:
    """Return ``$APIARY_ACCESS_TOKEN`` when set and non-empty."""
    return os.environ.get(ACCESS_TOKEN_ENV) or None


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. When *mode* is
    given it is applied to the temp file before any content is written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Application secrets ---


def application_secret_from_directory(
    dir: Path,
    secret_basename: str,
    default: ConsoleApplicationSecret,
) -> ApplicationSecret:
    """Load the application secret stored in *dir*.

    When ``dir/secret_basename`` does not exist, *default* is written there
    first and then read back.

    Raises:
        ConfigError: With exit code :data:`~apiary.exit_codes.EXIT_CONFIG_SECRET`
            when the file cannot be written or read, is not valid JSON, or
            holds neither an ``installed`` nor a ``web`` secret.
    """
    path = dir / secret_basename
    if not path.is_file():
        text = json.dumps(default.model_dump(mode="json", exclude_none=True), indent=4) + "\n"
        try:
            _atomic_write(path, text, mode=0o600)
        except OSError as exc:
            raise ConfigError(
                f"Failed to write application secret '{path}': {exc}", EXIT_CONFIG_SECRET
            ) from exc

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Failed to read application secret '{path}': {exc}", EXIT_CONFIG_SECRET
        ) from exc

    try:
        console = ConsoleApplicationSecret.model_validate_json(text)
    except ValidationError as exc:
        raise ConfigError(
            f"Application secret '{path}' has an invalid format: {exc}", EXIT_CONFIG_SECRET
        ) from exc

    secret = console.secret()
    if secret is None:
        raise ConfigError(
            f"Application secret '{path}' contains neither an 'installed' nor a 'web' section",
            EXIT_CONFIG_SECRET,
        )
    return secret
