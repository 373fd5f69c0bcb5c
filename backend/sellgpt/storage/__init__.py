"""
Artifact storage package.
"""
from sellgpt.storage.artifacts import (
    ArtifactStore,
    LocalArtifactStore,
    artifact_key,
    get_artifact_store,
)

__all__ = [
    "ArtifactStore",
    "LocalArtifactStore",
    "artifact_key",
    "get_artifact_store",
]
