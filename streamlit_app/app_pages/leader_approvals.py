import pandas as pd
import streamlit as st
from api import api_request, ApiError
from role_guard import require_role

require_role("ADMIN")

# --- HELPER FUNCTIONS ---
def authenticated_request(method, endpoint, data=None):
    token = st.session_state.get("token")
    if not token:
        st.warning("🔒 Please login first.")
        st.stop()
    try:
        return api_request(method, endpoint, token=token, json=data)
    except ApiError as e:
        st.error(f"Error {e.status_code}: {e.message}")
        return None


def act(method, endpoint, data=None):
    result = authenticated_request(method, endpoint, data)
    if result:
        st.session_state["approvals_flash"] = result.get("message", "Done")
        st.rerun()


def _user_label(req):
    user = req.get("user") or {}
    name = f"{user.get('first_name', '')} {user.get('last_name', '')}".strip()
    return name or req.get("user_id", "Unknown")


def _project_label(req):
    return (req.get("project") or {}).get("title", req.get("project_id"))


# --- TITLE ---
st.title("🧾 Leader Approvals")
st.markdown("Accept or reject leader requests and record project outcomes.")

flash = st.session_state.pop("approvals_flash", None)
if flash:
    st.success(flash)

requests_list = authenticated_request("GET", "/volunteer-leader/requests") or []

pending = [r for r in requests_list if r["status"] == "pending"]
accepted = [r for r in requests_list if r["status"] == "accepted"]

col_m1, col_m2, col_m3 = st.columns(3)
col_m1.metric("Pending", len(pending))
col_m2.metric("Active Leaders", len(accepted))
col_m3.metric("Total Requests", len(requests_list))

st.markdown("---")

tab_pending, tab_active, tab_history = st.tabs(["📥 Pending", "👑 Active Leaders", "📜 History"])

with tab_pending:
    if not pending:
        st.success("🎉 All caught up! No pending requests.")
    for req in pending:
        with st.container(border=True):
            col_who, col_actions = st.columns([3, 2])
            with col_who:
                st.markdown(f"### 👤 {_user_label(req)}")
                st.caption(f"Project: **{_project_label(req)}** · volunteered {req['volunteered_at'][:10]}")
            with col_actions:
                notes = st.text_input("Notes", key=f"reject_notes_{req['id']}")
                c1, c2 = st.columns(2)
                if c1.button("✅ Accept", key=f"accept_{req['id']}", use_container_width=True):
                    act("PUT", f"/volunteer-leader/accept/{req['id']}")
                if c2.button("❌ Reject", key=f"reject_{req['id']}", use_container_width=True):
                    act("PUT", f"/volunteer-leader/reject/{req['id']}", {"notes": notes or None})

with tab_active:
    if not accepted:
        st.info("No active volunteer leaders.")
    for req in accepted:
        with st.container(border=True):
            col_who, col_actions = st.columns([3, 2])
            with col_who:
                st.markdown(f"### 👑 {_user_label(req)}")
                st.caption(f"Leading **{_project_label(req)}**")
            with col_actions:
                notes = st.text_input("Outcome notes", key=f"complete_notes_{req['id']}")
                c1, c2 = st.columns(2)
                if c1.button("🏆 Success", key=f"success_{req['id']}", use_container_width=True):
                    act("PUT", f"/volunteer-leader/complete/{req['id']}", {"outcome": "success", "notes": notes or None})
                if c2.button("💥 Failure", key=f"failure_{req['id']}", use_container_width=True):
                    act("PUT", f"/volunteer-leader/complete/{req['id']}", {"outcome": "failure", "notes": notes or None})

with tab_history:
    if requests_list:
        df = pd.DataFrame([
            {
                "User": _user_label(r),
                "Project": _project_label(r),
                "Status": r["status"],
                "Outcome": r.get("outcome") or "",
                "Points": r.get("points_awarded", 0),
                "Completed": (r.get("completed_at") or "")[:10],
                "Notes": r.get("notes") or "",
            }
            for r in requests_list
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.info("No volunteer requests yet.")
