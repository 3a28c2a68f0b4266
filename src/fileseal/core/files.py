""" Helpers for moving files in and out of containers. """

import mimetypes
import secrets
from pathlib import Path
from typing import Tuple

from .container import DEFAULT_MIME_TYPE

CONTAINER_SUFFIX = ".fs"
OPAQUE_NAME_LEN = 12


def guess_mime_type(path) -> str:
    mime_type, _encoding = mimetypes.guess_type(str(path))
    return mime_type or DEFAULT_MIME_TYPE


def read_source(path, mime_type: str = None) -> Tuple[bytes, str, str]:
    """ Read a file to seal; returns (data, name, mime type). """
    path = Path(path).expanduser()
    data = path.read_bytes()
    return data, path.name, mime_type or guess_mime_type(path)


def opaque_name() -> str:
    # Containers get a random name so the file listing leaks nothing.
    return secrets.token_hex(OPAQUE_NAME_LEN // 2) + CONTAINER_SUFFIX


def safe_output_path(directory, stored_name: str, force: bool = False) -> Path:
    """
    Resolve where a restored file should be written.

    The name comes from inside the container and is untrusted: only its
    final component is used, so it can never escape ``directory``.
    """
    name = Path(stored_name.replace("\\", "/")).name
    if name in ("", ".", ".."):
        raise ValueError(f"refusing to restore a file named {stored_name!r}")
    target = Path(directory).expanduser() / name
    if target.exists() and not force:
        raise FileExistsError(f"{target} already exists (use --force to overwrite)")
    return target
