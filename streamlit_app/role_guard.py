import streamlit as st

from api import api_request


def _refresh_role_from_backend() -> None:
    token = st.session_state.get("token")
    if not token or st.session_state.get("role_synced"):
        return

    try:
        user = api_request("GET", "/me", token=token)
    except Exception:
        return

    if isinstance(user, dict):
        st.session_state["user"] = user
        st.session_state["user_role"] = user.get("role", st.session_state.get("user_role"))
        st.session_state["user_name"] = f"{user.get('first_name', '')} {user.get('last_name', '')}".strip()
        st.session_state["role_synced"] = True


def get_user_role() -> str:
    """
    Public function to get user role - used by navigation and pages
    """
    _refresh_role_from_backend()
    role = st.session_state.get("user_role")
    return str(role).upper() if role else ""


def require_role(*roles: str) -> None:
    role = get_user_role()
    if role not in roles:
        st.error("Access restricted. Your role does not have access to this page.")
        st.stop()
