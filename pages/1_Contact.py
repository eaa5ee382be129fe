import streamlit as st

from controllers.auth_controller import ensure_auth, get_api_client, logout_button, redirect_to_login
from controllers.contact_controller import ContactController
from common.ui import (
    edit_text, get_page_controller, new_upload, password_prompt, push_notice,
    render_notices, sidebar_header, source_type_toggle,
)
from common.utils import configure_logging, safe_rerun

st.set_page_config(page_title="Manage Contact", layout="wide")
configure_logging()

CTRL_KEY = "contact_ctrl"


def _controller() -> ContactController:
    return get_page_controller(CTRL_KEY, lambda: ContactController(
        get_api_client(), notify=push_notice, on_forced_logout=redirect_to_login,
    ))


def _coordinators(ctrl: ContactController, rev: int):
    st.subheader("Coordinators")
    with st.form("add_coordinator", clear_on_submit=True):
        c1, c2, c3 = st.columns([2, 2, 1])
        name = c1.text_input("Name")
        role = c2.text_input("Role")
        if c3.form_submit_button("➕ Add Coordinator") and name:
            if ctrl.add_coordinator(name.strip(), role.strip()):
                safe_rerun()

    coordinators = ctrl.contact.get("coordinators") or []
    if not coordinators:
        st.info("No coordinators yet.")
    for i, coord in enumerate(coordinators):
        with st.container(border=True):
            c1, c2, c3 = st.columns(3)
            with c1:
                edit_text("Name", coord["name"], f"coord_name_{rev}_{i}",
                          lambda v, i=i: ctrl.update_coordinator(i, "name", v))
            with c2:
                edit_text("Role", coord["role"], f"coord_role_{rev}_{i}",
                          lambda v, i=i: ctrl.update_coordinator(i, "role", v))
            with c3:
                edit_text("Phone", coord["phone"], f"coord_phone_{rev}_{i}",
                          lambda v, i=i: ctrl.update_coordinator(i, "phone", v))

            mode = source_type_toggle(coord["imageType"], f"coord_type_{rev}_{i}",
                                      lambda v, i=i: ctrl.update_coordinator(i, "imageType", v))
            if mode == "upload":
                picked = new_upload("Photo", f"coord_file_{rev}_{i}", types=["png", "jpg", "jpeg", "webp"])
                if ctrl.uploads.is_uploading(i):
                    st.caption("Uploading...")
                if picked:
                    with st.spinner("Uploading..."):
                        ctrl.upload_coordinator_image(i, *picked)
                    safe_rerun()
            else:
                edit_text("Image URL", coord["image"], f"coord_image_{rev}_{i}",
                          lambda v, i=i: ctrl.update_coordinator(i, "image", v))
            if coord["image"]:
                st.image(coord["image"], width=96)

            if st.button("🗑️ Remove", key=f"coord_remove_{rev}_{i}"):
                ctrl.remove_coordinator(i)
                safe_rerun()


def main():
    ensure_auth()
    sidebar_header(user=st.session_state.get("username"), show_custom_nav=True)
    logout_button()

    ctrl = _controller()
    top_l, top_r = st.columns([3, 1])
    top_l.title("📇 Manage Contact Info")
    if top_r.button("💾 Save Changes", disabled=ctrl.saving or not ctrl.loaded, type="primary"):
        ctrl.save()
    render_notices()
    password_prompt(ctrl.commit_flow, "contact")

    if not ctrl.loaded:
        if st.button("Retry loading"):
            ctrl.load()
            safe_rerun()
        st.stop()

    contact, rev = ctrl.contact, ctrl.editor.revision
    st.subheader("General")
    c1, c2 = st.columns(2)
    with c1:
        edit_text("Email", contact["email"], f"email_{rev}", lambda v: ctrl.update_field("email", v))
        edit_text("Instagram", contact["socialMedia"]["instagram"], f"ig_{rev}",
                  lambda v: ctrl.update_social("instagram", v))
    with c2:
        edit_text("Phone", contact["phone"], f"phone_{rev}", lambda v: ctrl.update_field("phone", v))
        edit_text("YouTube", contact["socialMedia"]["youtube"], f"yt_{rev}",
                  lambda v: ctrl.update_social("youtube", v))
    edit_text("Address", contact["address"], f"address_{rev}",
              lambda v: ctrl.update_field("address", v), widget=st.text_area)

    _coordinators(ctrl, rev)


if __name__ == "__main__":
    main()
