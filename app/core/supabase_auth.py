import logging
from functools import lru_cache

from fastapi import HTTPException, status

from app.core.config import SUPABASE_URL, SUPABASE_ANON_KEY

logger = logging.getLogger(__name__)


def supabase_enabled() -> bool:
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)


@lru_cache
def get_supabase_client():
    """
    Lazily build the Supabase client.
    Only called when SUPABASE_URL and SUPABASE_ANON_KEY are set.
    """
    if not supabase_enabled():
        raise RuntimeError("SUPABASE_URL or SUPABASE_ANON_KEY not set")

    from supabase import create_client

    return create_client(SUPABASE_URL, SUPABASE_ANON_KEY)


def get_user_from_token(token: str):
    """
    Resolve a Supabase access token to the Supabase user.
    """
    try:
        response = get_supabase_client().auth.get_user(token)
    except Exception as exc:
        logger.info("[AUTH] Supabase rejected token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Supabase token",
        )

    if not response or not response.user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Supabase token",
        )

    return response.user
