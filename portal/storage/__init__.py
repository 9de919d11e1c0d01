from portal.storage.base import BlobStore
from portal.storage.factory import get_blob_store

__all__ = ["BlobStore", "get_blob_store"]
