"""
Fungi Taxonomy Streamlit Application - Main Entry Point

Interactive browser for the classification of the Fungi kingdom. Every taxon can
be expanded to show its children and can disclose its description.

The application uses a startup/rerun pattern to minimize I/O operations:
- On startup (empty session_state): Load settings, build the taxonomy tree once
- On reruns: Use the cached tree from session_state

Run with:
streamlit run main.py
"""

# Standard library imports
import streamlit as st
import sys
import os

# Local imports - global config must be imported before anything else
from utils.config import *

# ═══════════════════════════════════════════════════════════════════════════════
# GLOBAL CONFIGURATION & SETUP (runs on every request)
# ═══════════════════════════════════════════════════════════════════════════════

# Force unbuffered output for real-time logging
sys.stdout.reconfigure(line_buffering=True)

from utils.common import load_app_settings, resolve_app_path, set_session_var, get_session_var
from backend.taxonomy import TaxonomyError
from components import header_large, warning_box
from components.taxonomy_tree import render_taxonomy_tree, reset_tree_state
from utils.taxonomy_loader import load_global_taxonomy

# Streamlit theme loaded from .streamlit/config.toml

# ═══════════════════════════════════════════════════════════════════════════════
# STARTUP INITIALIZATION (runs only when session_state is empty)
# ═══════════════════════════════════════════════════════════════════════════════

# Detect app startup: empty session_state means this is a fresh session
if st.session_state == {}:
    log("Starting Fungi Taxonomy app...")
    settings = load_app_settings()
    set_session_var("shared", "settings", settings)

settings = get_session_var("shared", "settings") or load_app_settings()

st.set_page_config(
    initial_sidebar_state="collapsed",
    page_title=settings["page_title"]
)

# Load and inject custom CSS
if os.path.exists(CSS_FILE):
    with open(CSS_FILE, "r", encoding="utf-8") as f:
        css_content = f.read()
    st.markdown(f"<style>{css_content}</style>", unsafe_allow_html=True)

# ═══════════════════════════════════════════════════════════════════════════════
# TAXONOMY
# ═══════════════════════════════════════════════════════════════════════════════

try:
    root = load_global_taxonomy(resolve_app_path(settings["taxonomy_file"]))
except (TaxonomyError, OSError) as e:
    # A tree that failed to build is never shown partially
    warning_box(f"{type(e).__name__}: {e}", title="The taxonomy could not be loaded")
    st.stop()

# ═══════════════════════════════════════════════════════════════════════════════
# PAGE
# ═══════════════════════════════════════════════════════════════════════════════

header_large(settings["page_title"])

with st.sidebar:
    st.button(":material/unfold_less: Collapse all", on_click=reset_tree_state,
              use_container_width=True)

render_taxonomy_tree(root, depth=0, show_attributes=settings.get("show_attributes", True))
