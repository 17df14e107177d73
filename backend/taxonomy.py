"""
Fungi Taxonomy Store

In-memory taxonomic tree built once at application startup. The store owns the
tree exclusively; the renderer only reads it.

Key Features:
- TaxonNode records with open-ended scalar attributes for leaf specimens
- Construction and attachment guarded against duplicate keys, cycles and
  shared ownership
- A fused add operation so a node is never created without being linked
- Freezing once the tree is complete, after which no node can be attached
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple, Union

# Separator used for name paths ("Fungi|Chytridiomycota|Chytridiomycetes")
PATH_SEPARATOR = "|"

AttributeValue = Union[str, int, float, bool]

# ═══════════════════════════════════════════════════════════════════════════════
# ERRORS
# ═══════════════════════════════════════════════════════════════════════════════


class TaxonomyError(Exception):
    """Base class for structural errors raised while building the tree."""


class InvalidSpec(TaxonomyError):
    """A taxon specification is missing a name or rank, or carries bad attributes."""


class DuplicateKey(TaxonomyError):
    """The parent already has a child under this key."""


class CycleDetected(TaxonomyError):
    """Attaching the child would make a node its own ancestor."""


class NotFound(TaxonomyError):
    """A child lookup missed."""


class AlreadyAttached(TaxonomyError):
    """The child already belongs to another parent."""


class FrozenTaxonomy(TaxonomyError):
    """The tree has been frozen and can no longer be modified."""


# ═══════════════════════════════════════════════════════════════════════════════
# DATA MODEL
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(eq=False)
class TaxonNode:
    """
    A single taxon in the classification hierarchy.

    `inherited_domain` is a derived attribute: a snapshot of the parent's
    `domain` taken when the node was created. It is not updated afterwards.
    """

    name: str
    rank: str
    description: Optional[str] = None
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)
    children: Dict[str, "TaxonNode"] = field(default_factory=dict)
    domain: Optional[str] = None
    inherited_domain: Optional[str] = None
    parent: Optional["TaxonNode"] = field(default=None, repr=False)
    frozen: bool = field(default=False, repr=False)

    @property
    def display_name(self):
        return self.name.replace("_", " ")

    @property
    def is_leaf(self):
        return not self.children

    @property
    def path(self):
        """Name path from the root down to this node, joined with PATH_SEPARATOR."""
        names = []
        node = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return PATH_SEPARATOR.join(reversed(names))

    def ancestors(self):
        """Yield the parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


# ═══════════════════════════════════════════════════════════════════════════════
# CONSTRUCTION
# ═══════════════════════════════════════════════════════════════════════════════


def _require_text(spec, field_name):
    value = spec.get(field_name)
    if not isinstance(value, str) or not value.strip():
        raise InvalidSpec(f"Taxon '{field_name}' must be a non-empty string, got {value!r}")
    return value


def _check_attributes(name, attributes):
    if attributes is None:
        return {}
    if not isinstance(attributes, dict):
        raise InvalidSpec(f"Attributes of '{name}' must be a mapping")
    checked = {}
    for key, value in attributes.items():
        if not isinstance(key, str) or not key:
            raise InvalidSpec(f"Attribute keys of '{name}' must be non-empty strings, got {key!r}")
        if not isinstance(value, (str, int, float, bool)):
            raise InvalidSpec(
                f"Attribute '{key}' of '{name}' must be a string, number or boolean, "
                f"got {type(value).__name__}")
        checked[key] = value
    return checked


def create_taxon(spec, parent=None):
    """
    Create a new, unattached taxon node.

    Args:
        spec (dict): {"name", "rank", "description"?, "attributes"?, "domain"?}
        parent (TaxonNode): Optional parent whose `domain` is snapshotted onto
            the new node as `inherited_domain`. The parent is not modified.

    Returns:
        TaxonNode: The new node with an empty children mapping.

    Raises:
        InvalidSpec: If name or rank is missing or empty, or an attribute is
            not a string, number or boolean.
    """
    if not isinstance(spec, dict):
        raise InvalidSpec(f"Taxon spec must be a mapping, got {type(spec).__name__}")

    name = _require_text(spec, "name")
    rank = _require_text(spec, "rank")

    description = spec.get("description")
    if description is not None and not isinstance(description, str):
        raise InvalidSpec(f"Description of '{name}' must be a string")

    domain = spec.get("domain")
    if domain is not None and not isinstance(domain, str):
        raise InvalidSpec(f"Domain of '{name}' must be a string")

    node = TaxonNode(
        name=name,
        rank=rank,
        description=description or None,
        attributes=_check_attributes(name, spec.get("attributes")),
        domain=domain,
    )

    if parent is not None and parent.domain:
        node.inherited_domain = parent.domain

    return node


def _check_attach(parent, key, child):
    if parent.frozen or child.frozen:
        raise FrozenTaxonomy(f"Cannot attach '{key}': the taxonomy is frozen")
    if key != child.name:
        raise InvalidSpec(f"Child key '{key}' does not match child name '{child.name}'")
    if key in parent.children:
        raise DuplicateKey(f"'{parent.name}' already has a child named '{key}'")
    if child is parent or any(ancestor is child for ancestor in parent.ancestors()):
        raise CycleDetected(f"Attaching '{child.name}' under '{parent.name}' would create a cycle")
    if child.parent is not None:
        raise AlreadyAttached(f"'{child.name}' is already a child of '{child.parent.name}'")


def attach_child(parent, key, child):
    """
    Insert `child` into `parent.children` under `key`.

    Raises:
        InvalidSpec: key differs from child.name
        DuplicateKey: key already present
        CycleDetected: child is parent or one of its ancestors
        AlreadyAttached: child already has a parent
        FrozenTaxonomy: parent belongs to a frozen tree
    """
    _check_attach(parent, key, child)
    parent.children[key] = child
    child.parent = parent


def add_taxon(parent, spec):
    """
    Create a taxon and attach it to `parent` under its own name in one step.

    Nothing is created if the attach would fail.
    """
    child = create_taxon(spec, parent)
    attach_child(parent, child.name, child)
    return child


# ═══════════════════════════════════════════════════════════════════════════════
# LOOKUP AND TRAVERSAL
# ═══════════════════════════════════════════════════════════════════════════════


def get_child(node, key):
    try:
        return node.children[key]
    except KeyError:
        raise NotFound(f"'{node.name}' has no child named '{key}'") from None


def find_path(root, path):
    """
    Resolve a name path such as "Fungi|Glomeromycota|Glomeromycetes".

    The first component must be the root's own name.
    """
    names = path.split(PATH_SEPARATOR)
    if names[0] != root.name:
        raise NotFound(f"Path '{path}' does not start at root '{root.name}'")
    node = root
    for name in names[1:]:
        node = get_child(node, name)
    return node


def walk(node, depth=0) -> Iterator[Tuple[TaxonNode, int]]:
    """Pre-order traversal yielding (node, depth), children in insertion order."""
    yield node, depth
    for child in node.children.values():
        yield from walk(child, depth + 1)


def validate_tree(root):
    """
    Re-check the structural invariants of a finished tree.

    Raises the matching TaxonomyError on the first violation.
    """
    if root.parent is not None:
        raise InvalidSpec(f"Root '{root.name}' must not have a parent")

    seen = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            raise CycleDetected(f"'{node.name}' is reachable more than once")
        seen.add(id(node))

        if not node.name or not node.rank:
            raise InvalidSpec("Every taxon needs a name and a rank")
        if node.attributes is None:
            raise InvalidSpec(f"Attributes of '{node.name}' must not be None")

        for key, child in node.children.items():
            if child.name != key:
                raise InvalidSpec(f"Child key '{key}' does not match child name '{child.name}'")
            if child.parent is not node:
                raise AlreadyAttached(f"'{child.name}' is not owned by '{node.name}'")
            stack.append(child)

    return len(seen)


def freeze(root):
    for node, _ in walk(root):
        node.frozen = True


# ═══════════════════════════════════════════════════════════════════════════════
# STORE
# ═══════════════════════════════════════════════════════════════════════════════


class TaxonomyStore:
    """
    Owner of a single taxonomy tree.

    Nodes are added parent-first with `add()`. Once `freeze()` has run the tree
    is immutable and `get_root()` hands it out.
    """

    def __init__(self):
        self._root = None
        self._frozen = False

    def add(self, spec, parent=None):
        if self._frozen:
            raise FrozenTaxonomy("Cannot add taxa to a frozen taxonomy")
        if parent is None:
            if self._root is not None:
                raise InvalidSpec(
                    f"Taxonomy already has root '{self._root.name}', "
                    f"'{spec.get('name') if isinstance(spec, dict) else spec}' needs a parent")
            self._root = create_taxon(spec)
            return self._root
        return add_taxon(parent, spec)

    def freeze(self):
        if self._root is None:
            raise InvalidSpec("Cannot freeze an empty taxonomy")
        validate_tree(self._root)
        freeze(self._root)
        self._frozen = True

    @property
    def frozen(self):
        return self._frozen

    def get_root(self):
        if self._root is None or not self._frozen:
            raise TaxonomyError("Taxonomy is not fully constructed yet")
        return self._root

    def count(self):
        if self._root is None:
            return 0
        return sum(1 for _ in walk(self._root))


def build_store(records):
    """
    Build and freeze a store from a sequence of taxon records.

    Each record is a taxon spec plus an optional "parent" name path pointing at
    an earlier record. Exactly one record has no parent.

    Args:
        records (list[dict]): Records in dependency order (parents first).

    Returns:
        TaxonomyStore: A frozen store.

    Raises:
        InvalidSpec: No root, several roots, or a malformed record
        NotFound: A parent path does not resolve to an earlier record
    """
    store = TaxonomyStore()
    root = None

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise InvalidSpec(f"Record {index} must be a mapping")
        spec = {k: v for k, v in record.items() if k != "parent"}
        parent_path = record.get("parent")

        if parent_path is None:
            root = store.add(spec)
            continue
        if not isinstance(parent_path, str) or not parent_path:
            raise InvalidSpec(f"Parent of '{spec.get('name')}' must be a non-empty name path, got {parent_path!r}")
        if root is None:
            raise NotFound(f"Record '{spec.get('name')}' refers to parent '{parent_path}' before any root")
        store.add(spec, find_path(root, parent_path))

    store.freeze()
    return store
