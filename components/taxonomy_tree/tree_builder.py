"""
Taxonomic tree builder utilities.

Turns a TaxonNode and the per-node UI state into the flat list of rows that the
tree view draws. Everything here is pure: the state is any mutable mapping, so
the same functions work on st.session_state sections and on plain dicts.
"""

import zlib

from backend.taxonomy import PATH_SEPARATOR
from utils.config import ROW_SATURATION, ROW_LIGHTNESS

EXPANDED = "expanded"
DESCRIPTION_VISIBLE = "description_visible"


# ═══════════════════════════════════════════════════════════════════════════════
# PER-NODE UI STATE
# ═══════════════════════════════════════════════════════════════════════════════

def node_key(path, name):
    """Key of a node in the UI state: its name path from the rendered root."""
    return f"{path}{PATH_SEPARATOR}{name}" if path else name


def _node_state(state, key):
    return state.get(key) or {}


def is_expanded(state, key):
    return bool(_node_state(state, key).get(EXPANDED, False))


def is_description_visible(state, key):
    return bool(_node_state(state, key).get(DESCRIPTION_VISIBLE, False))


def _flip(state, key, flag):
    node_state = dict(_node_state(state, key))
    node_state[flag] = not node_state.get(flag, False)
    state[key] = node_state
    return node_state[flag]


def toggle_expanded(state, key):
    """Flip the expanded flag of a node. Returns the new value."""
    return _flip(state, key, EXPANDED)


def toggle_description(state, key):
    """Flip the description flag of a node. Returns the new value."""
    return _flip(state, key, DESCRIPTION_VISIBLE)


# ═══════════════════════════════════════════════════════════════════════════════
# ROWS
# ═══════════════════════════════════════════════════════════════════════════════

def row_hue(name):
    """
    Cosmetic hue for a row, derived from the taxon name only.

    Uses crc32 so the value is stable across processes.
    """
    return zlib.crc32(name.encode("utf-8")) % 360


def row_color(hue):
    return f"hsl({hue}, {ROW_SATURATION}%, {ROW_LIGHTNESS}%)"


def build_visible_rows(node, state, depth=0, path=None):
    """
    Build the rows for a node and every descendant that is currently visible.

    Children are only included when their parent is expanded, and in the
    iteration order of the parent's children mapping.

    Args:
        node (TaxonNode): Node to render
        state (dict): Per-node UI state keyed by node_key()
        depth (int): Depth of `node` in the rendered tree
        path (str): Key of the parent, None for the rendered root

    Returns:
        list[dict]: One row per visible node, parents before children
    """
    key = node_key(path, node.name)
    has_toggle = bool(node.children)
    expanded = has_toggle and is_expanded(state, key)
    has_description = bool(node.description)
    description_visible = has_description and is_description_visible(state, key)

    row = {
        "key": key,
        "name": node.display_name,
        "rank": node.rank,
        "label": f"{node.display_name} ({node.rank})",
        "depth": depth,
        "has_toggle": has_toggle,
        "expanded": expanded,
        "has_description": has_description,
        "description_visible": description_visible,
        "description": node.description if description_visible else None,
        "description_label": None,
        "attributes": dict(node.attributes),
        "inherited_domain": node.inherited_domain,
        "hue": row_hue(node.name),
    }
    if has_description:
        row["description_label"] = "Hide Description" if description_visible else "Show Description"

    rows = [row]
    if expanded:
        for child in node.children.values():
            rows.extend(build_visible_rows(child, state, depth + 1, key))
    return rows
