"""
Catalog file persistence — atomic read/write of the package catalog.

The catalog is stored as pretty-printed JSON in
SysBackup/package_list.json: one key per manager, one array of
package names per key. Writes are atomic (write to temp file, then
rename) so an interrupted save never leaves half a document.

A catalog that cannot be read is an error, never an empty default: it
is the target state of an install run and cannot be guessed.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from sysbak.core.errors import CatalogError, CatalogNotFoundError
from sysbak.core.models.catalog import Catalog

logger = logging.getLogger(__name__)

# Default catalog location (relative to the working directory)
DEFAULT_BACKUP_DIR = "SysBackup"
DEFAULT_CATALOG_FILE = "package_list.json"


def load_catalog(path: Path) -> Catalog:
    """Load a catalog from a JSON file.

    Raises:
        CatalogNotFoundError: If the file does not exist.
        CatalogError: If the file cannot be read or is malformed.
    """
    if not path.is_file():
        raise CatalogNotFoundError(f"Catalog not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CatalogError(f"Failed to parse {path.name}: not UTF-8 ({e})") from e
    except OSError as e:
        raise CatalogError(f"Failed to read {path.name}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Failed to parse {path.name}: {e}") from e

    catalog = Catalog.from_document(data)
    logger.debug(
        "Loaded catalog from %s (%d managers, %d packages)",
        path, len(catalog.packages), catalog.total,
    )
    return catalog


def save_catalog(catalog: Catalog, path: Path) -> None:
    """Save a catalog to a JSON file (atomic write).

    Creates the parent directory on first save.

    Raises:
        CatalogError: If the file cannot be written.
    """
    content = json.dumps(catalog.to_document(), indent=2, ensure_ascii=False) + "\n"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".catalog_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(fd, "w", encoding="utf-8") as f:
                f.write(content)
            tmp.replace(path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save catalog to %s: %s", path, e)
        raise CatalogError(f"Failed to save package list to {path}: {e}") from e

    logger.info("Package list saved to %s", path)
