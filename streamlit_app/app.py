import streamlit as st
from api import ApiError, api_request
from auth import require_auth, show_profile_section
from role_guard import get_user_role
from navigation import setup_navigation

st.set_page_config(page_title="Project Leaders", layout="wide")

require_auth()
show_profile_section()

role = get_user_role()
if not role:
    st.info("🔄 Loading your dashboard...")
    st.stop()

with st.sidebar:
    try:
        points = api_request("GET", "/volunteer-leader/my-points", token=st.session_state.get("token"))
        st.metric("🏆 My points", points.get("total_points", 0))
    except ApiError as e:
        st.caption(f"Points unavailable: {e.message}")

pg = setup_navigation(role)
if pg:
    pg.run()
