"""Supabase Storage bucket as blob store."""
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseBlobStore:
    def __init__(self, supabase: Client, bucket_name: str):
        self.supabase = supabase
        self.bucket_name = bucket_name

    def _bucket(self):
        return self.supabase.storage.from_(self.bucket_name)

    def put(self, path: str, data: bytes, content_type: str) -> str:
        try:
            self._bucket().upload(
                path,
                data,
                file_options={"content-type": content_type, "upsert": "false"}
            )
            return path
        except Exception as e:
            logger.error(f"Supabase Storage upload failed ({path}): {str(e)}")
            raise

    def get(self, path: str) -> bytes:
        try:
            return self._bucket().download(path)
        except Exception as e:
            logger.error(f"Supabase Storage download failed ({path}): {str(e)}")
            raise

    def exists(self, path: str) -> bool:
        folder, _, name = path.rpartition("/")
        listed = self._bucket().list(folder, {"search": name})
        return any(obj.get("name") == name for obj in listed or [])

    def delete(self, path: str) -> None:
        """Remove one object; a missing object counts as removed.

        Storage answers an RLS-denied remove with the same empty list as a
        missing object, so an empty answer is confirmed with a listing.
        """
        try:
            removed = self._bucket().remove([path])
            if not removed and self.exists(path):
                raise RuntimeError(f"Object {path} was not removed")
        except Exception as e:
            logger.error(f"Supabase Storage delete failed ({path}): {str(e)}")
            raise
        if not removed:
            logger.warning("Blob already absent from Supabase Storage: %s", path)
