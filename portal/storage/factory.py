import logging

from fastapi import Depends
from supabase import Client

from portal.config import settings
from portal.database.supabase_client import get_supabase
from portal.storage.base import BlobStore
from portal.storage.s3_storage import S3BlobStore
from portal.storage.supabase_storage import SupabaseBlobStore

logger = logging.getLogger(__name__)


def get_blob_store(supabase: Client = Depends(get_supabase)) -> BlobStore:
    """S3 when fully configured, otherwise the Supabase Storage bucket."""
    if settings.s3_configured:
        try:
            return S3BlobStore()
        except Exception as e:
            logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
    return SupabaseBlobStore(supabase, settings.storage_bucket)
