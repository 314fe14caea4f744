import asyncio
import json
import logging
import os
import tempfile
from typing import Dict

from pydantic import ValidationError

from .exceptions import StorageReadError, StorageWriteError
from .models import CatalogDocument

# This file owns the JSON data file and the per-file write locks.

logger = logging.getLogger(__name__)

_LOCKS: Dict[str, asyncio.Lock] = {}

def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]


class JSONStorage:
    """Reads and atomically rewrites one Catalog Document file."""

    def __init__(self, path: str):
        self.path = os.path.abspath(path)

    @property
    def lock(self) -> asyncio.Lock:
        return _get_lock(self.path)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def _read(self) -> CatalogDocument:
        with open(self.path, "r", encoding="utf-8") as f:
            return CatalogDocument.model_validate(json.load(f))

    def _write(self, doc: CatalogDocument) -> None:
        directory = os.path.dirname(self.path)
        fd, tmp_path = tempfile.mkstemp(prefix=".catalog-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc.model_dump(), f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    async def load(self) -> CatalogDocument:
        try:
            return await asyncio.to_thread(self._read)
        except (OSError, ValueError, ValidationError) as e:
            logger.exception("could not read %s", self.path)
            raise StorageReadError() from e

    async def save(self, doc: CatalogDocument) -> None:
        try:
            await asyncio.to_thread(self._write, doc)
        except (OSError, TypeError, ValueError) as e:
            logger.exception("could not write %s", self.path)
            raise StorageWriteError() from e

    def initialize(self) -> bool:
        """Write an empty document if the file is missing. Returns True if created."""
        if self.exists():
            return False
        try:
            self._write(CatalogDocument())
        except OSError as e:
            logger.exception("could not create %s", self.path)
            raise StorageWriteError() from e
        logger.info("created empty catalog at %s", self.path)
        return True
