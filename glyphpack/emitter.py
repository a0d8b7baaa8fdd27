"""
Emitter: assembles the ``make_icon_set!`` declaration and writes it.

Writing is a two-step operation with a fixed order:

1. if the target exists, rename it to ``<stem>_<timestamp>.old<ext>``;
2. create the target fresh and write the new text.

Step 2 never starts when step 1 fails, and an existing file is never
overwritten in place.
"""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from glyphpack.config import Settings, settings as default_settings
from glyphpack.errors import FilesystemError
from glyphpack.models import IconEntry, OutputDocument
from glyphpack.render import indent

logger = logging.getLogger("glyphpack.emitter")

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def struct_name(size: int) -> str:
    return f"Icons{size}"


def output_path(size: int, config: Optional[Settings] = None) -> Path:
    config = config or default_settings
    return Path(config.OUTPUT_DIR) / f"icons{size}.rs"


def archive_path(path: Path, now: datetime) -> Path:
    """icons5.rs -> icons5_2024-01-31T12:00:00.old.rs, same directory."""
    stamp = now.strftime(TIMESTAMP_FORMAT)
    return path.with_name(f"{path.stem}_{stamp}.old{path.suffix}")


def format_entry(entry: IconEntry) -> str:
    rows = ",\n".join(f"{indent(3)}{token}" for token in entry.packed)
    comment = "\n".join(entry.comment)
    return f"{comment}\n{indent(2)}{entry.const_name}: {entry.method_name} = &[\n{rows}\n{indent(2)}]"


def build_document(size: int, entries: List[IconEntry], config: Optional[Settings] = None) -> str:
    config = config or default_settings
    body = ",\n\n".join(format_entry(entry) for entry in entries)
    text = f"""
use {config.MACRO_IMPORT};

make_icon_set! {{
{indent(1)}pub {struct_name(size)}: {size} {{
{body}
{indent(1)}}}
}}
"""
    return text.strip()


def write_document(document: OutputDocument, clock: Optional[Callable[[], datetime]] = None) -> Optional[Path]:
    """
    Archive any previous output, then write ``document``.

    Returns the archive path, or None when there was nothing to archive.
    Raises FilesystemError if either step fails.
    """
    clock = clock or utc_now
    path = Path(document.path)
    archived = None

    # Step 1: archive
    if path.exists():
        archived = archive_path(path, clock())
        if archived.exists():
            raise FilesystemError(f"Archive {archived} already exists, refusing to overwrite it", archived)
        logger.info(f"Icons with same size already exists. Renaming old file to {archived.name}...")
        try:
            path.rename(archived)
        except OSError as e:
            raise FilesystemError(f"Could not archive {path}: {e}", path)

    # Step 2: write
    created = False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "x", encoding="utf-8") as f:
            created = True
            f.write(document.text)
    except OSError as e:
        if created:
            _remove_partial(path)
        note = f"; previous output kept at {archived}" if archived else ""
        raise FilesystemError(f"Could not write {path}: {e}{note}", path)

    logger.info(f"Wrote {len(document.entries)} icon(s) to {path}")
    return archived


def _remove_partial(path: Path) -> None:
    try:
        path.unlink()
    except OSError as e:
        logger.warning(f"Could not remove partially written {path}: {e}")
