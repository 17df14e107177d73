"""
Fungi Taxonomy Global Configuration

This module defines global constants and utility functions used across the entire project.
It establishes the directory structure that all other modules depend on.

Key Features:
- Centralized path management for data, settings and logs
- Session state section names shared by the loader and the tree view
- Unified logging function

Important: This file is imported by main.py before session_state exists, so it cannot
depend on Streamlit session state.
"""

import os

# ═══════════════════════════════════════════════════════════════════════════════
# CORE DIRECTORY STRUCTURE
# ═══════════════════════════════════════════════════════════════════════════════

# Root of the app - points directly to the streamlit app root
# Path calculation: utils/config.py -> utils -> app root
APP_ROOT = os.path.dirname(os.path.dirname(os.path.realpath(__file__)))

# Seed data for the taxonomy tree
DATA_DIR = os.path.join(APP_ROOT, "assets", "data")
DEFAULT_TAXONOMY_FILE = os.path.join(DATA_DIR, "fungi_taxonomy.json")

# Application-level settings (created with defaults on first start)
APP_SETTINGS_FILE = os.path.join(APP_ROOT, "config", "settings.json")

# Log file, appended to by log()
LOG_FILE = os.path.join(APP_ROOT, "assets", "logs", "log.txt")

# Stylesheet injected on every rerun
CSS_FILE = os.path.join(APP_ROOT, "assets", "css", "styles.css")

# ═══════════════════════════════════════════════════════════════════════════════
# SESSION STATE
# ═══════════════════════════════════════════════════════════════════════════════

# Key holding the root TaxonNode once the tree is built
TAXONOMY_SESSION_KEY = "taxonomy"

# Section holding per-node expanded / description flags
TREE_STATE_SECTION = "taxonomy_tree"

# ═══════════════════════════════════════════════════════════════════════════════
# UTILITY FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def log(msg):
    """
    Unified logging function that writes to both file and console.

    Args:
        msg (str): Message to log

    Behavior:
        - Appends message to assets/logs/log.txt (directory created on demand)
        - Prints message to console (stdout)
    """
    os.makedirs(os.path.dirname(LOG_FILE), exist_ok=True)
    with open(LOG_FILE, 'a', encoding="utf-8") as f:
        f.write(f"{msg}\n")
    print(msg)

# ═══════════════════════════════════════════════════════════════════════════════
# DEFAULTS
# ═══════════════════════════════════════════════════════════════════════════════

DEFAULT_PAGE_TITLE = "Fungi Taxonomy"

# Saturation / lightness of the per-row tint; the hue comes from the taxon name
ROW_SATURATION = 70
ROW_LIGHTNESS = 80
