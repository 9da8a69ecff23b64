"""
Database client factory for Supabase.

Provides both service-role clients (for backend operations bypassing RLS)
and user-authenticated clients (for operations respecting RLS).

Clients are not cached here; the application's ServiceContainer owns the
service client for the lifetime of the process.
"""

from supabase import create_client, Client

from .config import Settings


def create_service_client(settings: Settings) -> Client:
    """
    Create a Supabase client with the service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as repairing a missing profile or applying a payment webhook.

    Args:
        settings: Application settings carrying Supabase credentials

    Returns:
        Supabase client configured with service role key
    """
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )


def create_user_client(settings: Settings, access_token: str) -> Client:
    """
    Create a Supabase client authenticated as a specific user.

    Use this for operations that should respect Row Level Security (RLS),
    such as a user updating their own profile photo.

    Args:
        settings: Application settings carrying Supabase credentials
        access_token: JWT access token from Supabase Auth

    Returns:
        Supabase client configured with user's access token
    """
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )

    client = create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
    )
    # Set the session with the access token (refresh_token can be empty for backend use)
    client.auth.set_session(access_token, "")
    return client
