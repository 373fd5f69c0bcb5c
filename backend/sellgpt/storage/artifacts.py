"""
Per-shop artifact storage.

Artifacts are opaque text blobs addressed by a relative key such as
``llm/{shop_id}.txt``. The local backend keeps them under a directory on
disk; writes go to a temporary sibling first so readers never observe a
half-written file.
"""
import os
import tempfile
from pathlib import Path
from typing import Protocol
from uuid import UUID

from sellgpt.core.config import settings
from sellgpt.core.exceptions import ArtifactNotFound, StorageError
from sellgpt.core.logging import get_logger

logger = get_logger(__name__)

ARTIFACT_PREFIX = "llm"


def artifact_key(shop_id: UUID | str) -> str:
    """Storage key of a shop's llms.txt."""
    return f"{ARTIFACT_PREFIX}/{shop_id}.txt"


class ArtifactStore(Protocol):
    def put(self, key: str, content: str) -> None: ...

    def get(self, key: str) -> str: ...

    def exists(self, key: str) -> bool: ...

    def delete(self, key: str) -> bool: ...

    def location(self, key: str) -> str: ...


class LocalArtifactStore:
    """Filesystem-backed artifact store rooted at a single directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise StorageError(f"Invalid artifact key: {key}")
        return path

    def location(self, key: str) -> str:
        return str(self._path(key))

    def put(self, key: str, content: str) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                    fh.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Artifact write failed", key=key, error=str(e))
            raise StorageError(f"Failed to write {key}: {e}") from e

        logger.debug("Artifact written", key=key, size=len(content))

    def get(self, key: str) -> str:
        path = self._path(key)
        try:
            with path.open(encoding="utf-8", newline="") as fh:
                return fh.read()
        except FileNotFoundError:
            raise ArtifactNotFound(key) from None
        except OSError as e:
            raise StorageError(f"Failed to read {key}: {e}") from e

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def delete(self, key: str) -> bool:
        """Delete a blob. Returns False when there was nothing to delete."""
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e
        return True


def get_artifact_store() -> ArtifactStore:
    """Dependency returning the configured artifact store."""
    return LocalArtifactStore(settings.storage_root)
