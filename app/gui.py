import streamlit as st

# MUST be the first Streamlit command
st.set_page_config(layout="wide", page_title="Résumé Builder")

import html
import logging

from log import setup_logging
from builder import ResumeBuilder
from forms import PERSONAL_FORM, HEADINGS, entry_blocks, entry_widget_keys, parse_widget_key
from preview import render_preview_html
from exporter import ExportPipeline
import config

setup_logging()
log = logging.getLogger("gui")

SECTION_LABELS = {
    "personal": "👤 Personal",
    "education": "🎓 Education",
    "experience": "💼 Experience",
    "projects": "🚀 Projects",
    "skills": "🛠️ Skills",
}

# One controller and one export pipeline per browser session
if "builder" not in st.session_state:
    st.session_state.builder = ResumeBuilder()
    log.info("New résumé session")
if "pipeline" not in st.session_state:
    st.session_state.pipeline = ExportPipeline()
if "last_export" not in st.session_state:
    st.session_state.last_export = None

builder: ResumeBuilder = st.session_state.builder
pipeline: ExportPipeline = st.session_state.pipeline

st.markdown("""
<style>
div.stButton > button {
    border-radius: 8px !important;
    font-weight: 500 !important;
}
div.stDownloadButton > button {
    background: linear-gradient(90deg, #10ac84 0%, #1dd1a1 100%) !important;
    color: white !important;
    border: none !important;
    border-radius: 8px !important;
    width: 100% !important;
}
.skill-tag {
    display: inline-block;
    background: #2d3748;
    color: #fff;
    border-radius: 12px;
    padding: 2px 10px;
}
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# ───────────────────────────────────────── callbacks ──
def on_section_change():
    labels = {v: k for k, v in SECTION_LABELS.items()}
    builder.switch_section(labels[st.session_state.section_select])


def on_personal_change(field: str):
    builder.update_personal(field, st.session_state[f"personal-{field}"])


def on_entry_change(key: str):
    category, entry_id, field = parse_widget_key(key)
    builder.update_entry(category, entry_id, field, st.session_state[key])


def on_remove_entry(category: str, entry_id: int):
    if builder.remove_entry(category, entry_id):
        for key in entry_widget_keys(category, entry_id):
            st.session_state.pop(key, None)


def on_add_skill():
    if builder.add_skill(st.session_state.get("skill-input", "")):
        st.session_state["skill-input"] = ""


# ───────────────────────────────────────── form sections ──
def render_personal_form():
    st.subheader("Personal Information")
    for field, label, placeholder, _ in PERSONAL_FORM:
        key = f"personal-{field}"
        if key not in st.session_state:
            st.session_state[key] = builder.resume_data["personalInfo"][field]
        st.text_input(label, key=key, placeholder=placeholder,
                      on_change=on_personal_change, args=(field,))


def render_entry_list(category: str):
    st.subheader(SECTION_LABELS[category].split(" ", 1)[1])
    blocks = entry_blocks(builder, category)
    if not blocks:
        st.caption(f"No {category} added yet.")

    for block in blocks:
        with st.container(border=True):
            col_head, col_remove = st.columns([4, 1])
            with col_head:
                st.markdown(f"**{block['heading']}**")
            with col_remove:
                st.button("Remove", key=block["remove_key"],
                          on_click=on_remove_entry, args=(category, block["id"]))
            for f in block["fields"]:
                if f["key"] not in st.session_state:
                    st.session_state[f["key"]] = f["value"]
                widget = st.text_area if f["multiline"] else st.text_input
                widget(f["label"], key=f["key"], placeholder=f["placeholder"],
                       on_change=on_entry_change, args=(f["key"],))

    st.button(f"➕ Add {HEADINGS[category]}", key=f"add-{category}",
              on_click=builder.add_entry, args=(category,))


def render_skills_form():
    st.subheader("Skills")
    col_input, col_add = st.columns([4, 1])
    with col_input:
        st.text_input("Skill", key="skill-input", placeholder="e.g. Python",
                      label_visibility="collapsed", on_change=on_add_skill)
    with col_add:
        st.button("Add Skill", key="add-skill", on_click=on_add_skill)

    skills = builder.resume_data["skills"]
    if not skills:
        st.caption("No skills added yet.")
    for i, skill in enumerate(skills):
        col_tag, col_x = st.columns([5, 1])
        with col_tag:
            st.markdown(f'<span class="skill-tag">{html.escape(skill)}</span>', unsafe_allow_html=True)
        with col_x:
            st.button("×", key=f"skill-remove-{i}-{skill}",
                      on_click=builder.remove_skill, args=(skill,))


# ───────────────────────────────────────── preview & export ──
@st.fragment(run_every=config.PREVIEW_REFRESH_S)
def render_preview_panel():
    col_title, col_export = st.columns([2, 1])
    with col_title:
        st.subheader("👁️ Live Preview")
    with col_export:
        clicked = st.button(pipeline.trigger_label, key="download-pdf", type="primary",
                            disabled=pipeline.trigger_disabled)

    if clicked:
        with st.spinner("Generating PDF..."):
            st.session_state.last_export = pipeline.run(builder)

    result = st.session_state.last_export
    if result is not None:
        if result.ok:
            st.download_button(
                f"💾 Save {result.filename}",
                data=result.pdf,
                file_name=result.filename,
                mime="application/pdf",
                key="save-pdf",
            )
            if result.path:
                st.caption(f"Also written to {result.path}")
        else:
            st.error(f"Error: {result.error}")

    preview_html = render_preview_html(builder.snapshot())
    st.components.v1.html(preview_html, height=900, scrolling=True)


st.title("📄 Résumé Builder")
st.markdown("Fill in the forms on the left; the preview on the right updates as you type.")

col_form, col_preview = st.columns([1, 1])

with col_form:
    st.radio(
        "Section",
        options=list(SECTION_LABELS.values()),
        index=list(SECTION_LABELS).index(builder.current_section),
        key="section_select",
        horizontal=True,
        label_visibility="collapsed",
        on_change=on_section_change,
    )
    st.divider()
    section = builder.current_section
    if section == "personal":
        render_personal_form()
    elif section == "skills":
        render_skills_form()
    else:
        render_entry_list(section)

with col_preview:
    render_preview_panel()
