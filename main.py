#!/usr/bin/env python3
import os
import json
import requests
import streamlit as st

from helpers.field_extraction import ExtractionResult
from helpers.batch_worker import process_single_file
from helpers.export import apply_edits, export_filename, to_json, summary_lines

st.set_page_config(page_title="Parsely - Resume Extractor", layout="wide")

DEFAULT_API_BASE = os.getenv("RESUME_API_BASE", "http://127.0.0.1:8000")
UPLOAD_TYPES = ["pdf", "docx", "txt", "md"]

# -------------------- Hero Title --------------------
st.markdown(
    """
    <h1 style='text-align:center; color:#4caf50; font-size:48px; margin-bottom:0;'>
        Parsely - Resume Extractor
    </h1>
    <h3 style='text-align:center; color:#555; margin-top:-10px;'>
        Name, contact, location, summary and skills from a single resume
    </h3>
    """,
    unsafe_allow_html=True
)

# -------------------- Sidebar --------------------
with st.sidebar:
    st.header("⚙️ Parsing")
    use_api = st.checkbox("Parse through the API", value=False, key="use_api",
                          help="Off: parse in this session. On: send the file to the FastAPI service.")
    api_base = st.text_input("🛜 API Base URL", value=DEFAULT_API_BASE, disabled=not use_api)

# -------------------- Backend Helpers --------------------
def parse_via_api(api_base, filename, data):
    r = requests.post(api_base.rstrip("/") + "/parse", files={"file": (filename, data)}, timeout=120)
    if not r.ok:
        raise RuntimeError(f"API error {r.status_code}: {r.text}")
    return r.json()

def parse_locally(filename, data):
    envelope = process_single_file(filename, data)
    if envelope.get("status") != "ok":
        raise RuntimeError(envelope.get("error") or "Parsing failed")
    return envelope

# -------------------- Upload --------------------
with st.container():
    col1, col2, col3 = st.columns([1, 6, 1])
    with col2:
        uploaded = st.file_uploader("Upload resume (pdf/docx/txt/md)", type=UPLOAD_TYPES, key="single_file")
        btn_col1, btn_col2 = st.columns([2, 2])
        with btn_col1:
            parse_clicked = st.button("Parse Resume", key="parse_btn")
        with btn_col2:
            clear_clicked = st.button("Clear Results", key="clear_btn")

if clear_clicked:
    st.session_state.pop("result", None)
    st.session_state.pop("result_file", None)

if parse_clicked:
    if not uploaded:
        st.warning("Please upload a resume first.")
    else:
        try:
            with st.spinner("Parsing..."):
                if use_api:
                    envelope = parse_via_api(api_base, uploaded.name, uploaded.getvalue())
                else:
                    envelope = parse_locally(uploaded.name, uploaded.getvalue())
            st.session_state["result"] = ExtractionResult.from_dict(envelope.get("parsed", {}))
            st.session_state["result_file"] = uploaded.name
            st.success(f"Parsed successfully in {envelope.get('parse_time', 0.0):.2f} s")
        except Exception as e:
            st.error(f"Parsing failed: {e}")

# -------------------- Review / Edit --------------------
result = st.session_state.get("result")
if result:
    filename = st.session_state.get("result_file")
    left, right = st.columns([2, 3])

    with left:
        st.subheader("Detected")
        st.markdown(f"**File:** {filename}")
        for label, value in summary_lines(result).items():
            st.markdown(f"**{label.title()}:** {value}")

    with right:
        st.subheader("Review & edit")
        with st.form("edit_form"):
            edits = {
                "name": st.text_input("Name", value=result.name or ""),
                "email": st.text_input("Email", value=result.email or ""),
                "phone": st.text_input("Phone", value=result.phone or ""),
                "location": st.text_input("Location", value=result.location or ""),
                "summary": st.text_area("Summary", value=result.summary or ""),
                "skills": st.text_input("Skills (comma separated)", value=", ".join(result.skills)),
            }
            if st.form_submit_button("Apply edits"):
                st.session_state["result"] = apply_edits(result, edits)
                st.rerun()

    st.markdown("---")
    current = st.session_state["result"]
    st.download_button(
        "⬇️ Download JSON",
        data=to_json(current),
        file_name=export_filename(filename),
        mime="application/json",
    )
    with st.expander("Show JSON (copy)", expanded=False):
        st.code(json.dumps(current.to_dict(), indent=2, ensure_ascii=False), language="json")
else:
    st.info("Upload a resume to extract basic fields like name, email, phone, skills and more.")
