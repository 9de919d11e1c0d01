from typing import Protocol


class BlobStore(Protocol):
    """Binary storage keyed by path, independent of the metadata tables."""

    def put(self, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` at ``path``; never overwrites. Returns the stored path."""
        ...

    def get(self, path: str) -> bytes:
        ...

    def delete(self, path: str) -> None:
        ...
