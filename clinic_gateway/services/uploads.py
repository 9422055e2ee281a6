from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import UploadFile

logger = logging.getLogger(__name__)


def persist_upload(upload: UploadFile, upload_dir: Path) -> Path:
    """Copy an upload to disk, keeping its extension for format detection."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(upload.filename or "").suffix or ".tmp"
    tmp_file = tempfile.NamedTemporaryFile(
        delete=False, suffix=suffix, dir=upload_dir
    )
    with tmp_file as buffer:
        upload.file.seek(0)
        shutil.copyfileobj(upload.file, buffer)
    return Path(tmp_file.name)


@contextmanager
def staged_upload(upload: UploadFile, upload_dir: Path) -> Iterator[Path]:
    """Stage ``upload`` for the duration of the block, then always remove it."""
    path = persist_upload(upload, upload_dir)
    logger.debug("Staged upload %s at %s", upload.filename, path)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)
