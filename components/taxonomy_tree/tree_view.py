"""
Taxonomy Tree View

Streamlit component that draws a taxon and its visible descendants as nested,
expandable rows. Per-node UI state lives in its own session state section and
never touches the taxonomy itself.
"""

import html

import streamlit as st

from utils.common import get_session_section, clear_vars, logged_callback
from utils.config import TREE_STATE_SECTION
from components.ui_helpers import info_box, code_span
from .tree_builder import build_visible_rows, toggle_expanded, toggle_description, row_color

# Column weight added per depth level to indent a row
INDENT_WEIGHT = 0.4


@logged_callback
def _on_toggle_expanded(state, node_key):
    toggle_expanded(state, node_key)


@logged_callback
def _on_toggle_description(state, node_key):
    toggle_description(state, node_key)


def reset_tree_state(key=TREE_STATE_SECTION):
    """
    Collapse every node and hide every description.

    Args:
        key: Session state section of the tree instance
    """
    clear_vars(key)


def _label_html(row):
    color = row_color(row["hue"])
    return (
        f"<div class='taxon-row' style='background: linear-gradient(135deg, {color}, transparent);'>"
        f"<span class='taxon-name'>{html.escape(row['name'])}</span> "
        f"<span class='taxon-rank'>({html.escape(row['rank'])})</span>"
        "</div>"
    )


def _render_attributes(row):
    lines = [f"- {code_span(html.escape(name))} {html.escape(str(value))}" for name, value in row["attributes"].items()]
    st.markdown("\n".join(lines), unsafe_allow_html=True)


def _render_row(row, state, key, show_attributes):
    node_key = row["key"]
    _, toggle_col, label_col, desc_col = st.columns([row["depth"] * INDENT_WEIGHT + 0.01, 1, 8, 3])

    with toggle_col:
        # Leaves get no expand control
        if row["has_toggle"]:
            st.button(
                ":material/expand_more:" if row["expanded"] else ":material/chevron_right:",
                key=f"{key}_expand_{node_key}",
                type="tertiary",
                help="Collapse" if row["expanded"] else "Expand",
                on_click=_on_toggle_expanded,
                args=(state, node_key),
            )

    with label_col:
        st.markdown(_label_html(row), unsafe_allow_html=True)
        if row["inherited_domain"]:
            st.caption(f"Domain: {row['inherited_domain']}")

    with desc_col:
        if row["has_description"]:
            st.button(
                row["description_label"],
                key=f"{key}_description_{node_key}",
                use_container_width=True,
                on_click=_on_toggle_description,
                args=(state, node_key),
            )

    if row["description_visible"]:
        info_box(row["description"])
        if show_attributes and row["attributes"]:
            _render_attributes(row)


def render_taxonomy_tree(root, depth=0, key=TREE_STATE_SECTION, show_attributes=True):
    """
    Render a taxon and its expanded descendants.

    Args:
        root: TaxonNode to start from
        depth: Depth assigned to `root`, 0 for the full tree
        key: Session state section holding this tree's UI state
        show_attributes: Show leaf specimen attributes under the description

    Returns:
        list[dict]: The rows that were drawn, parents before children

    Usage:
        root = load_global_taxonomy()
        render_taxonomy_tree(root)
    """
    state = get_session_section(key)
    rows = build_visible_rows(root, state, depth)

    for row in rows:
        _render_row(row, state, key, show_attributes)

    return rows
