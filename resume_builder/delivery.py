"""delivery.py
Temporary on-disk artifacts for rendered resumes.
"""
import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from resume_builder.config import BUILDER_DEFAULTS
from resume_builder.exceptions import DeliveryError

DOWNLOAD_FILENAME = "resume.pdf"
PDF_MEDIA_TYPE = "application/pdf"


@contextmanager
def temporary_resume_file(
    pdf_bytes: bytes,
    directory: str | os.PathLike = BUILDER_DEFAULTS.TEMP_DIR,
) -> Iterator[Path]:
    """
    Write rendered bytes to a uniquely named file and remove it on exit.

    The file is deleted however the block exits (normal return, exception,
    or a failure part-way through writing).

    Args:
        pdf_bytes (bytes): The rendered document.
        directory (str | os.PathLike): Folder to create the file in. Created
            if missing.

    Yields:
        Path: Path of the written file.

    Raises:
        DeliveryError: If the directory cannot be created or the file cannot
            be written.
    """
    temp_path = Path(directory) / f"resume_{uuid.uuid4().hex}.pdf"

    try:
        try:
            os.makedirs(directory, exist_ok=True)
            temp_path.write_bytes(pdf_bytes)
        except OSError as e:
            raise DeliveryError(str(temp_path), str(e))
        yield temp_path
    finally:
        # ---- Cleanup temp file ----
        try:
            os.remove(temp_path)
        except (FileNotFoundError, NotADirectoryError):
            pass


def read_for_delivery(file_path: Path) -> bytes:
    """
    Read a temporary artifact back for sending to the caller.

    Raises:
        DeliveryError: If the file cannot be read.
    """
    try:
        return Path(file_path).read_bytes()
    except OSError as e:
        raise DeliveryError(str(file_path), str(e))


def attachment_headers(filename: str = DOWNLOAD_FILENAME) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}
