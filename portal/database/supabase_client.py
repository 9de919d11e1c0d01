"""Process-wide Supabase clients: anon key for request handling, service role for admin scripts."""
from supabase import create_client, Client
from portal.config import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with the service_role key, needed for auth.admin and cross-user profile writes.

        The anon client cannot list users or change other accounts' roles, so
        there is no fallback to it.
        """
        if not settings.supabase_service_role_key:
            raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is required for role assignment")
        if cls._service_client is None:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    """FastAPI dependency; tests override it with an in-memory double."""
    return SupabaseClient.get_client()
