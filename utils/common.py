
"""
Fungi Taxonomy Common Utilities

Shared utility functions used across the application including:
- Session state management
- Application settings stored as JSON
- Logging wrapper for Streamlit callbacks
"""

import os
import json
import functools
import traceback
import streamlit as st

from utils.config import *


# ═══════════════════════════════════════════════════════════════════════════════
# SESSION STATE
# ═══════════════════════════════════════════════════════════════════════════════

def clear_vars(section):
    """
    Clear all variables in session state for a specific section.
    """
    if section in st.session_state:
        st.session_state[section] = {}


def init_session_state(section):
    """
    Initialize session state for a specific section if it doesn't exist.
    """
    if section not in st.session_state:
        st.session_state[section] = {}


def get_session_section(section):
    """
    Return the dict stored for a section, creating it if needed.
    """
    init_session_state(section)
    return st.session_state[section]


def get_session_var(section, var_name, default=None):
    """
    Get a variable from session state for a specific section.
    """
    init_session_state(section)
    return st.session_state[section].get(var_name, default)


def set_session_var(section, var_name, value):
    """
    Set a variable in session state for a specific section.
    """
    init_session_state(section)
    st.session_state[section][var_name] = value


# ═══════════════════════════════════════════════════════════════════════════════
# APPLICATION SETTINGS
# ═══════════════════════════════════════════════════════════════════════════════

DEFAULT_APP_SETTINGS = {
    # Relative paths are resolved against the app root
    "taxonomy_file": os.path.relpath(DEFAULT_TAXONOMY_FILE, APP_ROOT),
    "page_title": DEFAULT_PAGE_TITLE,
    "show_attributes": True
}


def load_app_settings(settings_file=None):
    """
    Load application-level settings from config/settings.json.
    Creates the file with defaults if missing or invalid.

    Missing keys are filled in from DEFAULT_APP_SETTINGS.
    """
    settings_file = settings_file or APP_SETTINGS_FILE
    os.makedirs(os.path.dirname(settings_file), exist_ok=True)

    if not os.path.exists(settings_file):
        save_app_settings(DEFAULT_APP_SETTINGS, settings_file)
        return DEFAULT_APP_SETTINGS.copy()

    try:
        with open(settings_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings.json must contain an object")
    except (json.JSONDecodeError, ValueError) as e:
        log(f"Invalid settings file {settings_file} ({e}), restoring defaults")
        save_app_settings(DEFAULT_APP_SETTINGS, settings_file)
        return DEFAULT_APP_SETTINGS.copy()

    settings = DEFAULT_APP_SETTINGS.copy()
    settings.update(data)
    return settings


def save_app_settings(settings_dict, settings_file=None):
    """
    Persist application-level settings to config/settings.json.
    """
    settings_file = settings_file or APP_SETTINGS_FILE
    os.makedirs(os.path.dirname(settings_file), exist_ok=True)
    with open(settings_file, "w", encoding="utf-8") as f:
        json.dump(settings_dict, f, indent=2)


def resolve_app_path(path):
    """Resolve a settings path relative to the app root."""
    if os.path.isabs(path):
        return path
    return os.path.join(APP_ROOT, path)


# ═══════════════════════════════════════════════════════════════════════════════
# CALLBACK ERROR LOGGING WRAPPER
# ═══════════════════════════════════════════════════════════════════════════════

def logged_callback(func):
    """
    Decorator to wrap Streamlit callbacks with error logging.

    This ensures that any exceptions in callbacks are logged to the file
    before Streamlit catches and displays them in the UI.

    Usage:
        @logged_callback
        def on_button_click():
            # Your callback code here
            pass
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            log(f"ERROR in callback {func.__name__}: {type(e).__name__}: {e}")
            log(traceback.format_exc())
            # Re-raise so Streamlit still shows the error in UI
            raise

    return wrapper
