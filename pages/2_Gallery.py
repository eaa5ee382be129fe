import streamlit as st

from controllers.auth_controller import ensure_auth, get_api_client, logout_button, redirect_to_login
from controllers.gallery_controller import GalleryController
from common.ui import (
    edit_text, get_page_controller, new_upload, password_prompt, push_notice,
    render_notices, sidebar_header, source_type_toggle,
)
from common.utils import configure_logging, is_valid_url, safe_rerun

st.set_page_config(page_title="Manage Gallery", layout="wide")
configure_logging()

CTRL_KEY = "gallery_ctrl"
COLUMNS = 3


def _controller() -> GalleryController:
    return get_page_controller(CTRL_KEY, lambda: GalleryController(
        get_api_client(), notify=push_notice, on_forced_logout=redirect_to_login,
    ))


def _image_card(ctrl: GalleryController, item: dict, rev: int, confirm_drop: bool):
    rid = item["id"]
    with st.container(border=True):
        if item["url"] and is_valid_url(item["url"]):
            st.image(item["url"], use_container_width=True)
        else:
            st.caption("No image yet")

        edit_text("Title", item["title"], f"title_{rev}_{rid}",
                  lambda v: ctrl.update_field(rid, "title", v))
        mode = source_type_toggle(item["type"], f"type_{rev}_{rid}",
                                  lambda v: ctrl.update_field(rid, "type", v))
        if mode == "upload":
            picked = new_upload("Image file", f"file_{rev}_{rid}", types=["png", "jpg", "jpeg", "webp", "gif"])
            if ctrl.uploads.is_uploading(rid):
                st.caption("Uploading...")
            if picked:
                with st.spinner("Uploading..."):
                    ctrl.upload_image(rid, *picked)
                safe_rerun()
        else:
            edit_text("Image URL", item["url"], f"url_{rev}_{rid}",
                      lambda v: ctrl.update_field(rid, "url", v))
            if not is_valid_url(item["url"]):
                st.warning("Please enter a valid URL (https://...)")

        if st.button("🗑️ Delete", key=f"delete_{rev}_{rid}"):
            ctrl.delete(rid, confirm_drop=confirm_drop)
            safe_rerun()


def main():
    ensure_auth()
    sidebar_header(user=st.session_state.get("username"), show_custom_nav=True)
    logout_button()

    ctrl = _controller()
    st.title("🖼️ Manage Gallery")

    c1, c2, c3 = st.columns([3, 1, 1])
    c1.caption("Images without a Title or URL are removed when saving or deleting.")
    if c2.button("➕ Add Image", disabled=not ctrl.loaded):
        ctrl.add_image()
    save_clicked = c3.button("💾 Save Changes", disabled=ctrl.saving or not ctrl.loaded, type="primary")

    incomplete = ctrl.incomplete_count() if ctrl.loaded else 0
    confirm_drop = False
    if incomplete:
        confirm_drop = st.checkbox(f"Remove {incomplete} incomplete image(s) when saving or deleting", key="gallery_confirm_drop")
    if save_clicked:
        ctrl.save(confirm_drop=confirm_drop)

    render_notices()
    password_prompt(ctrl.commit_flow, "gallery")

    if not ctrl.loaded:
        if st.button("Retry loading"):
            ctrl.load()
            safe_rerun()
        st.stop()

    items, rev = ctrl.records, ctrl.editor.revision
    if not items:
        st.info("The gallery is empty. Click 'Add Image' to start.")
    for start in range(0, len(items), COLUMNS):
        cols = st.columns(COLUMNS)
        for col, item in zip(cols, items[start:start + COLUMNS]):
            with col:
                _image_card(ctrl, item, rev, confirm_drop)


if __name__ == "__main__":
    main()
