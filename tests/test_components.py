"""
Tests for UI components.
"""

import unittest
from unittest.mock import patch, MagicMock

from backend.taxonomy import create_taxon, add_taxon
from components.taxonomy_tree.tree_builder import (
    build_visible_rows,
    is_description_visible,
    is_expanded,
    node_key,
    row_color,
    row_hue,
    toggle_description,
    toggle_expanded,
)


def fungi_with_phylum():
    root = create_taxon({"name": "Fungi", "rank": "Kingdom"})
    add_taxon(root, {"name": "Chytridiomycota", "rank": "Phylum"})
    return root


def three_level_chain():
    root = create_taxon({"name": "Fungi", "rank": "Kingdom"})
    phylum = add_taxon(root, {"name": "Chytridiomycota", "rank": "Phylum"})
    add_taxon(phylum, {"name": "Chytridiomycetes", "rank": "Class"})
    return root


class TestTreeState(unittest.TestCase):
    """Test cases for the per-node expanded / description flags."""

    def test_initially_collapsed_and_hidden(self):
        state = {}
        self.assertFalse(is_expanded(state, "Fungi"))
        self.assertFalse(is_description_visible(state, "Fungi"))

    def test_toggles_are_independent(self):
        state = {}
        self.assertTrue(toggle_expanded(state, "Fungi"))
        self.assertFalse(is_description_visible(state, "Fungi"))
        self.assertTrue(toggle_description(state, "Fungi"))
        self.assertTrue(is_expanded(state, "Fungi"))
        self.assertFalse(is_expanded(state, "Fungi|Chytridiomycota"))

    def test_double_toggle_is_identity(self):
        state = {}
        toggle_expanded(state, "Fungi")
        toggle_expanded(state, "Fungi")
        toggle_description(state, "Fungi")
        toggle_description(state, "Fungi")
        self.assertFalse(is_expanded(state, "Fungi"))
        self.assertFalse(is_description_visible(state, "Fungi"))

    def test_node_key(self):
        self.assertEqual(node_key(None, "Fungi"), "Fungi")
        self.assertEqual(node_key("Fungi", "Chytridiomycota"), "Fungi|Chytridiomycota")


class TestTreeBuilder(unittest.TestCase):
    """Test cases for build_visible_rows."""

    def test_collapsed_root_shows_only_root(self):
        rows = build_visible_rows(fungi_with_phylum(), {})
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["label"], "Fungi (Kingdom)")
        self.assertTrue(rows[0]["has_toggle"])
        self.assertFalse(rows[0]["expanded"])

    def test_expanding_root_reveals_child(self):
        root = fungi_with_phylum()
        state = {}
        toggle_expanded(state, "Fungi")
        rows = build_visible_rows(root, state)

        self.assertEqual([row["label"] for row in rows], ["Fungi (Kingdom)", "Chytridiomycota (Phylum)"])
        self.assertEqual(rows[1]["depth"], 1)
        self.assertEqual(rows[1]["key"], "Fungi|Chytridiomycota")

    def test_leaf_never_has_toggle(self):
        leaf = create_taxon({"name": "Chytridium", "rank": "Genus", "attributes": {"habitat": "Soil"}})
        state = {}
        for _ in range(3):
            rows = build_visible_rows(leaf, state)
            self.assertEqual(len(rows), 1)
            self.assertFalse(rows[0]["has_toggle"])
            self.assertFalse(rows[0]["expanded"])
            self.assertEqual(rows[0]["attributes"], {"habitat": "Soil"})
            toggle_expanded(state, "Chytridium")

    def test_description_toggle(self):
        node = create_taxon({"name": "Fungi", "rank": "Kingdom", "description": "X"})
        state = {}

        row = build_visible_rows(node, state)[0]
        self.assertTrue(row["has_description"])
        self.assertEqual(row["description_label"], "Show Description")
        self.assertIsNone(row["description"])

        toggle_description(state, "Fungi")
        row = build_visible_rows(node, state)[0]
        self.assertEqual(row["description"], "X")
        self.assertEqual(row["description_label"], "Hide Description")

        toggle_description(state, "Fungi")
        row = build_visible_rows(node, state)[0]
        self.assertIsNone(row["description"])
        self.assertEqual(row["description_label"], "Show Description")

    def test_no_description_no_toggle(self):
        node = create_taxon({"name": "Fungi", "rank": "Kingdom"})
        state = {}
        toggle_description(state, "Fungi")
        row = build_visible_rows(node, state)[0]
        self.assertFalse(row["has_description"])
        self.assertFalse(row["description_visible"])
        self.assertIsNone(row["description_label"])
        self.assertIsNone(row["description"])

    def test_three_level_chain_parent_before_child(self):
        state = {}
        toggle_expanded(state, "Fungi")
        toggle_expanded(state, "Fungi|Chytridiomycota")
        rows = build_visible_rows(three_level_chain(), state)
        self.assertEqual(
            [(row["label"], row["depth"]) for row in rows],
            [("Fungi (Kingdom)", 0), ("Chytridiomycota (Phylum)", 1), ("Chytridiomycetes (Class)", 2)],
        )

    def test_collapsed_parent_hides_expanded_descendants(self):
        state = {}
        toggle_expanded(state, "Fungi|Chytridiomycota")
        rows = build_visible_rows(three_level_chain(), state)
        self.assertEqual(len(rows), 1)

    def test_children_in_insertion_order(self):
        root = create_taxon({"name": "Fungi", "rank": "Kingdom"})
        for name in ("Microsporidia", "Blastocladiomycota", "Glomeromycota"):
            add_taxon(root, {"name": name, "rank": "Phylum"})
        state = {}
        toggle_expanded(state, "Fungi")
        rows = build_visible_rows(root, state)
        self.assertEqual([row["name"] for row in rows[1:]], ["Microsporidia", "Blastocladiomycota", "Glomeromycota"])

    def test_start_depth(self):
        rows = build_visible_rows(fungi_with_phylum(), {}, depth=2)
        self.assertEqual(rows[0]["depth"], 2)

    def test_hue_depends_on_name_only(self):
        state = {}
        toggle_expanded(state, "Fungi")
        first = build_visible_rows(fungi_with_phylum(), state)
        second = build_visible_rows(fungi_with_phylum(), {})
        self.assertEqual(first[0]["hue"], second[0]["hue"])
        self.assertEqual(first[0]["hue"], row_hue("Fungi"))
        self.assertTrue(0 <= row_hue("Chytridiomycota") < 360)
        self.assertEqual(row_color(120), "hsl(120, 70%, 80%)")


class TestTreeView(unittest.TestCase):
    """Test cases for render_taxonomy_tree with Streamlit mocked out."""

    def setUp(self):
        self.session_state = {}
        self.st = MagicMock()
        self.st.session_state = self.session_state
        self.st.columns.side_effect = lambda spec: [MagicMock() for _ in spec]

        patches = [
            patch("components.taxonomy_tree.tree_view.st", self.st),
            patch("utils.common.st", self.st),
            patch("components.taxonomy_tree.tree_view.info_box"),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def _buttons(self, marker):
        return [c for c in self.st.button.call_args_list if marker in c.kwargs.get("key", "")]

    def _click(self, button_call):
        button_call.kwargs["on_click"](*button_call.kwargs["args"])

    def test_collapsed_root(self):
        from components.taxonomy_tree import render_taxonomy_tree

        rows = render_taxonomy_tree(fungi_with_phylum())

        self.assertEqual(len(rows), 1)
        self.assertEqual(len(self._buttons("_expand_")), 1)
        self.assertEqual(len(self._buttons("_description_")), 0)

    def test_click_expand_reveals_child(self):
        from components.taxonomy_tree import render_taxonomy_tree

        root = fungi_with_phylum()
        render_taxonomy_tree(root)
        self._click(self._buttons("_expand_")[0])

        self.st.button.reset_mock()
        rows = render_taxonomy_tree(root)
        self.assertEqual([row["label"] for row in rows], ["Fungi (Kingdom)", "Chytridiomycota (Phylum)"])
        # The leaf child gets no expand button
        self.assertEqual(len(self._buttons("_expand_")), 1)
        self.assertTrue(self.session_state["taxonomy_tree"]["Fungi"]["expanded"])

    def test_click_description(self):
        from components.taxonomy_tree import render_taxonomy_tree
        from components.taxonomy_tree import tree_view

        node = create_taxon({"name": "Fungi", "rank": "Kingdom", "description": "X"})
        render_taxonomy_tree(node)
        button = self._buttons("_description_")[0]
        self.assertEqual(button.args[0], "Show Description")

        self._click(button)
        self.st.button.reset_mock()
        render_taxonomy_tree(node)
        self.assertEqual(self._buttons("_description_")[0].args[0], "Hide Description")
        tree_view.info_box.assert_called_once_with("X")

    def test_separate_tree_instances(self):
        from components.taxonomy_tree import render_taxonomy_tree

        root = fungi_with_phylum()
        render_taxonomy_tree(root, key="left")
        self._click(self._buttons("_expand_")[0])

        self.assertEqual(len(render_taxonomy_tree(root, key="left")), 2)
        self.assertEqual(len(render_taxonomy_tree(root, key="right")), 1)

    def test_reset_tree_state(self):
        from components.taxonomy_tree import render_taxonomy_tree, reset_tree_state

        root = fungi_with_phylum()
        render_taxonomy_tree(root)
        self._click(self._buttons("_expand_")[0])
        reset_tree_state()

        self.assertEqual(len(render_taxonomy_tree(root)), 1)

    def test_markup_in_names_is_escaped(self):
        """Names and ranks are shown as text, not interpreted as HTML."""
        from components.taxonomy_tree import render_taxonomy_tree

        node = create_taxon({"name": "<b>Fungi</b> & co", "rank": "King<dom>"})
        render_taxonomy_tree(node)

        label_markup = self.st.markdown.call_args_list[0].args[0]
        self.assertIn("&lt;b&gt;Fungi&lt;/b&gt; &amp; co", label_markup)
        self.assertIn("(King&lt;dom&gt;)", label_markup)
        self.assertNotIn("<b>", label_markup)


if __name__ == '__main__':
    unittest.main()
