import streamlit as st
from api import api_request, ApiError
from role_guard import require_role

require_role("EMPLOYEE", "ADMIN")

PRIORITY_BADGES = {
    "high": "🔴 HIGH",
    "medium": "🟡 MEDIUM",
    "low": "🟢 LOW",
}

STATUS_BADGES = {
    "pending": "⏳ Pending",
    "accepted": "✅ Accepted",
    "rejected": "❌ Rejected",
    "completed": "🏆 Completed",
}

# ---------------- Helpers ----------------

def fetch_available_projects(token):
    try:
        return api_request("GET", "/volunteer-leader/available-projects", token=token) or []
    except ApiError as e:
        st.error(f"Failed to fetch available projects: {e.message}")
        return []


def fetch_my_points(token):
    try:
        return api_request("GET", "/volunteer-leader/my-points", token=token)
    except ApiError:
        return None


def volunteer(token, project_id):
    try:
        result = api_request("POST", f"/volunteer-leader/volunteer/{project_id}", token=token)
    except ApiError as e:
        st.toast(e.message or "Failed to volunteer", icon="⚠️")
        return
    st.session_state["volunteer_flash"] = f"🎉 {result['message']}"
    st.rerun()

# ---------------- Page ----------------

token = st.session_state.get("token")

st.title("🔥 Volunteer as Leader")
st.caption("Take charge & earn 2x points!")

st.warning(
    "**Risk & Reward System:**  \n"
    "✅ **Success:** earn **+2x points** for completing the project successfully  \n"
    "❌ **Failure:** lose **-2x points** if the project fails"
)

flash = st.session_state.pop("volunteer_flash", None)
if flash:
    st.success(flash)

points = fetch_my_points(token)
if points:
    col_total, col_month = st.columns(2)
    col_total.metric("Total Points", points.get("total_points", 0))
    col_month.metric("This Month", points.get("monthly_points", 0))

projects = fetch_available_projects(token)

st.subheader(f"Your Projects ({len(projects)})")

if not projects:
    st.info("No projects assigned to you. Projects you're assigned to will appear here.")

for project in projects:
    with st.container(border=True):
        col_info, col_priority = st.columns([4, 1])

        with col_info:
            title = project["title"]
            if project.get("has_leader"):
                title += "  · 👑 Has Leader"
            st.markdown(f"### {title}")
            if project.get("description"):
                st.write(project["description"])
            leader = project.get("project_leader")
            if project.get("has_leader") and leader:
                st.caption(f"Current Leader: {leader['first_name']} {leader['last_name']}")

        with col_priority:
            st.markdown(f"**{PRIORITY_BADGES.get(project['priority'], project['priority'].upper())}**")

        col_meta, col_action = st.columns([4, 1])
        with col_meta:
            meta = f"Status: **{project['status']}**"
            if project.get("start_date"):
                meta += f" · Start: {project['start_date']}"
            st.markdown(meta)

        with col_action:
            if project.get("has_volunteered"):
                st.markdown(STATUS_BADGES.get(project.get("volunteer_status"), project.get("volunteer_status") or ""))
            elif st.button("🔥 Volunteer", key=f"volunteer_{project['id']}", use_container_width=True):
                volunteer(token, project["id"])
