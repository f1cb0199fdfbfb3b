import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import (
    AccessTokenResponse,
    LoginRequest,
    MessageResponse,
    RefreshTokenRequest,
    TokenResponse,
)
from app.core.security import (
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.core.supabase_auth import get_supabase_client, supabase_enabled

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_payload(user: User, access_token: str, refresh_token, auth_method: str) -> dict:
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "user_id": str(user.id),
        "user_name": user.full_name,
        "user_email": user.email,
        "user_role": user.role.value,
        "auth_method": auth_method,
    }


# -------------------------
# LOGIN - Supports both Supabase and JWT
# -------------------------
@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Tries Supabase first (when configured), then falls back to the
    password hash stored on the user.
    """
    user = db.query(User).filter(User.email == payload.email).first()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive",
        )

    if supabase_enabled():
        try:
            supabase_res = get_supabase_client().auth.sign_in_with_password({
                "email": payload.email,
                "password": payload.password,
            })
        except Exception as exc:
            logger.info("[AUTH] Supabase login failed for %s, trying JWT: %s", payload.email, exc)
            supabase_res = None

        if supabase_res and supabase_res.session:
            return _token_payload(
                user,
                supabase_res.session.access_token,
                getattr(supabase_res.session, "refresh_token", None),
                "supabase",
            )

    if not user.password_hash:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password. This account may require Supabase authentication.",
        )

    if not verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    access_token = create_access_token({"sub": str(user.id), "role": user.role.value})
    refresh_token = create_refresh_token({"sub": str(user.id)})

    return _token_payload(user, access_token, refresh_token, "jwt")


# -------------------------
# REFRESH TOKEN
# -------------------------
@router.post("/refresh", response_model=AccessTokenResponse)
def refresh_token(payload: RefreshTokenRequest):
    """Refresh JWT access token using refresh token."""
    decoded = decode_token(payload.refresh_token)

    if not decoded or decoded.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )

    return {"access_token": create_access_token({"sub": decoded.get("sub")})}


# -------------------------
# LOGOUT
# -------------------------
@router.post("/logout", response_model=MessageResponse)
def logout():
    """Logout endpoint (stateless - client deletes tokens)."""
    return {"message": "Logged out successfully"}
