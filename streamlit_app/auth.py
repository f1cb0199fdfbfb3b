import os

import streamlit as st

from api import API_BASE_URL, ApiError, api_request

# ============================================
# AUTH TOGGLE CONFIGURATION
# ============================================
# Must match backend DISABLE_AUTH in app/core/config.py
# ============================================
DISABLE_AUTH = os.getenv("DISABLE_AUTH", "false").lower() == "true"


def _set_user_session(data: dict) -> None:
    st.session_state["token"] = data["access_token"]
    st.session_state["user"] = {
        "id": data["user_id"],
        "email": data["user_email"],
        "name": data["user_name"],
        "role": data["user_role"],
    }
    st.session_state["user_email"] = data["user_email"]
    st.session_state["user_id"] = data["user_id"]
    st.session_state["user_name"] = data["user_name"]
    st.session_state["user_role"] = data["user_role"]


def login_ui():
    st.title("Login")

    if DISABLE_AUTH:
        st.info("🔓 Auth is currently disabled - Click below to continue")
        if st.button("Continue (No Auth Required)"):
            st.session_state["token"] = "bypass_token"
            st.session_state["user_name"] = "Local Admin"
            st.session_state["user_role"] = "ADMIN"
            st.rerun()
        return

    st.caption(f"Signing in against {API_BASE_URL}")
    email = st.text_input("Email", key="login_email")
    password = st.text_input("Password", type="password", key="login_password")

    if st.button("Login", key="login_btn"):
        if not email or not password:
            st.error("Please enter both email and password")
            return
        try:
            data = api_request("POST", "/auth/login", json={"email": email, "password": password})
        except ApiError as e:
            st.error(f"❌ {e.message}")
            return
        except Exception as e:
            st.error(f"Login error: {e}")
            return

        _set_user_session(data)
        st.success(f"✅ Logged in successfully ({data.get('auth_method', 'jwt')})")
        st.rerun()


def show_profile_section():
    with st.sidebar:
        st.markdown(f"**{st.session_state.get('user_name', '')}**")
        st.caption(str(st.session_state.get("user_role", "")).title())
        if st.button("Logout", key="logout_btn"):
            st.session_state.clear()
            st.rerun()


def require_auth():
    """
    Call this at the top of every protected page.
    """
    if "token" not in st.session_state:
        login_ui()
        st.stop()
