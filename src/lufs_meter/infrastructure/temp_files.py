"""Temporary-file infrastructure helpers."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Iterator


@contextmanager
def temporary_upload_path(payload: bytes, suffix: str) -> Iterator[Path]:
    """Write ``payload`` to a named temporary file that is deleted on exit.

    Decoders pick the container from the suffix, so keep the upload's.
    """

    with NamedTemporaryFile(suffix=suffix) as temp_file:
        temp_file.write(payload)
        temp_file.flush()
        yield Path(temp_file.name)
