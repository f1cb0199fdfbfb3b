"""
Navigation module for role-based page routing using st.navigation
"""
import streamlit as st

PAGE_CONFIGS = {
    "volunteer_leader": {
        "file": "app_pages/volunteer_leader.py",
        "label": "Volunteer as Leader",
        "icon": "🔥",
        "roles": ["EMPLOYEE", "ADMIN"],
    },
    "leader_approvals": {
        "file": "app_pages/leader_approvals.py",
        "label": "Leader Approvals",
        "icon": "🧾",
        "roles": ["ADMIN"],
    },
}


def get_pages_for_role(role: str) -> list:
    role = role.upper() if role else ""

    pages = []
    for page_config in PAGE_CONFIGS.values():
        if role in page_config["roles"]:
            pages.append(st.Page(
                page_config["file"],
                title=page_config["label"],
                icon=page_config["icon"],
            ))
    return pages


def setup_navigation(role: str):
    pages = get_pages_for_role(role)

    if not pages:
        st.error("No pages available for your role. Please contact an administrator.")
        st.stop()
        return None

    return st.navigation(pages)
