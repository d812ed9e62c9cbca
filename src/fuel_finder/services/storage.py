from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

from django.conf import settings

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "enhanced-route-"
OUTPUT_SUFFIX = ".gpx"


def output_dir() -> Path:
    directory = Path(settings.GPX_OUTPUT_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def save_output(content: str) -> str:
    directory = output_dir()
    purge_expired_outputs(directory, settings.GPX_OUTPUT_TTL_SECONDS)

    filename = f"{OUTPUT_PREFIX}{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{OUTPUT_SUFFIX}"
    (directory / filename).write_text(content, encoding="utf-8")
    return filename


def purge_expired_outputs(directory: Path, max_age_seconds: float) -> int:
    cutoff = time.time() - max_age_seconds
    removed = 0
    for path in directory.glob(f"{OUTPUT_PREFIX}*{OUTPUT_SUFFIX}"):
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
        except FileNotFoundError:
            continue
    if removed:
        logger.info("Purged %d expired output files", removed)
    return removed


def is_valid_output_name(filename: str) -> bool:
    return (
        filename.endswith(OUTPUT_SUFFIX)
        and "/" not in filename
        and "\\" not in filename
        and filename not in {".", ".."}
        and not filename.startswith(".")
    )


def resolve_output(filename: str) -> Path | None:
    if not is_valid_output_name(filename):
        return None
    path = output_dir() / filename
    if not path.is_file():
        return None
    return path
