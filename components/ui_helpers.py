"""
UI helper functions for the Fungi Taxonomy Streamlit application.
"""

import streamlit as st
from st_flexible_callout_elements import flexible_callout


def info_box(msg, title=None, icon=":material/info:"):
    """
    Display an informational callout box.

    Args:
        msg: The message to display
        title: Optional title (will be bold)
        icon: Icon to display (default: info icon)
    """
    if title:
        msg = f'<span style="font-weight: bold;">{title}</span><br>{msg}'

    flexible_callout(msg,
                     icon=icon,
                     background_color="#d9e3e7af",
                     font_color="#086164",
                     icon_size=23)


def warning_box(msg, title=None, icon=":material/warning:"):
    """
    Display a warning callout box.

    Args:
        msg: The message to display
        title: Optional title (will be bold)
        icon: Icon to display (default: warning icon)
    """
    if title:
        msg = f'<span style="font-weight: bold;">{title}</span><br>{msg}'

    flexible_callout(msg,
                     icon=icon,
                     background_color="#fffbeb",
                     font_color="#936b0c",
                     icon_size=23)


def code_span(text):
    """
    Wrap text in a styled code span with monospace font and specific color.

    Args:
        text: The text to wrap in code styling

    Returns:
        str: HTML formatted code span
    """
    return f"<code style='color:#086164; font-family:monospace;'>{text}</code>"


def header_large(text):
    """
    Display a large custom header.

    Args:
        text: The header text to display
    """
    st.markdown(f"<h1 style='font-size: 2.5rem; font-weight: 600; margin-bottom: 0.15rem;'>{text}</h1><hr style='margin-top: 0; margin-bottom: 1rem; border: none; border-top: 2px solid #0f6064;'>", unsafe_allow_html=True)
