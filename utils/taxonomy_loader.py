"""
Global Taxonomy Loader

Builds the taxonomy tree once at app startup and stores its root in session state.
This provides a single source of truth for the tree across reruns.
"""

import json
import streamlit as st

from backend.taxonomy import InvalidSpec, TaxonomyError, build_store
from utils.config import log, DEFAULT_TAXONOMY_FILE, TAXONOMY_SESSION_KEY


def read_taxon_records(data_file):
    """
    Read the taxon records from a seed JSON file.

    The file holds {"taxa": [record, ...]}, each record being
    {"name", "rank", "description"?, "attributes"?, "domain"?, "parent"?}
    with "parent" the "|"-joined name path of an earlier record.

    Raises:
        InvalidSpec: If the file is not valid JSON or lacks a "taxa" list
    """
    try:
        with open(data_file, 'r', encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidSpec(f"Taxonomy file {data_file} is not valid JSON: {e}") from e

    records = data.get("taxa") if isinstance(data, dict) else None
    if not isinstance(records, list):
        raise InvalidSpec(f"Taxonomy file {data_file} must contain a 'taxa' list")
    return records


def build_taxonomy(data_file=DEFAULT_TAXONOMY_FILE):
    """
    Build the frozen taxonomy tree from a seed file.

    Returns:
        TaxonNode: The root of the tree.

    Raises:
        TaxonomyError: On any structural problem in the seed data
        OSError: If the file cannot be read
    """
    log(f"Building taxonomy from {data_file}...")
    try:
        store = build_store(read_taxon_records(data_file))
    except TaxonomyError as e:
        log(f"  ✗ Taxonomy build failed: {type(e).__name__}: {e}")
        raise

    root = store.get_root()
    log(f"  ✓ Taxonomy built: {store.count()} taxa under {root.name} ({root.rank})")
    return root


def load_global_taxonomy(data_file=DEFAULT_TAXONOMY_FILE):
    """
    Build the taxonomy once and store the root in st.session_state["taxonomy"].

    Reruns reuse the cached root. Errors propagate so startup can be aborted
    instead of showing a partial tree.

    Returns:
        TaxonNode: The root of the tree (also stored in session state)
    """

    # Check if already loaded
    if TAXONOMY_SESSION_KEY in st.session_state:
        return st.session_state[TAXONOMY_SESSION_KEY]

    root = build_taxonomy(data_file)
    st.session_state[TAXONOMY_SESSION_KEY] = root
    return root
