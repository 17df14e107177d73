"""
UI Components package for the Fungi Taxonomy Streamlit application.

This package contains the taxonomy tree view and small reusable UI helpers.
"""

from .ui_helpers import info_box, warning_box, code_span, header_large

__all__ = [
    'info_box',
    'warning_box',
    'code_span',
    'header_large'
]
