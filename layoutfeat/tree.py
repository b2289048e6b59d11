"""
Parse trees as an arena of nodes

Nodes are plain integer ids into a :py:class:`ParseTree`. Each node
knows the id of its parent and the ids of its children, so walking
up or down the tree is just a matter of chasing ids.
"""

from collections import namedtuple

# pylint: disable=too-few-public-methods


class TreeException(Exception):
    "Something went wrong building or querying a parse tree"

    def __init__(self, msg):
        super(TreeException, self).__init__(msg)


class Node(namedtuple("Node",
                      "parent children rule_index symbol")):
    """
    Storage for a single node (you probably want to go through the
    :py:class:`ParseTree` accessors instead)

    Parameters
    ----------
    parent : int or None
        id of the parent node (None for the root)
    children : [int]
        ids of the children, in source order
    rule_index : int or None
        grammar rule for rule nodes, None for leaves
    symbol : Token or None
        the wrapped token for leaves, None for rule nodes
    """
    def is_leaf(self):
        "True if this node wraps a token"
        return self.symbol is not None


class ParseTree(object):
    """
    A concrete syntax tree

    Build it top-down and in source order: create a rule node
    with :py:meth:`add_rule`, then its contents. Adding a leaf
    extends the token span of every rule above it, so rule
    start/stop tokens need not be given explicitly.

    The arena may hold more than one root (a forest), eg. when
    several fragments are parsed separately; the first root
    added is the main one.
    """
    def __init__(self):
        self._nodes = []
        self._roots = []
        self._start = {}
        self._stop = {}

    def __len__(self):
        return len(self._nodes)

    def _add(self, node):
        node_id = len(self._nodes)
        if node.parent is None:
            self._roots.append(node_id)
        elif not 0 <= node.parent < node_id:
            oops = "No such parent node: {}"
            raise TreeException(oops.format(node.parent))
        elif self._nodes[node.parent].is_leaf():
            oops = "Cannot add children to leaf node {}"
            raise TreeException(oops.format(node.parent))
        self._nodes.append(node)
        if node.parent is not None:
            self._nodes[node.parent].children.append(node_id)
        return node_id

    def add_rule(self, rule_index, parent=None):
        """
        Add a rule node under `parent` (None for the root)

        :rtype: int
        """
        return self._add(Node(parent=parent, children=[],
                              rule_index=rule_index, symbol=None))

    def add_leaf(self, token, parent):
        """
        Add a leaf wrapping `token` as the last child of `parent`

        :rtype: int
        """
        node_id = self._add(Node(parent=parent, children=[],
                                 rule_index=None, symbol=token))
        for anc in self.ancestors(node_id):
            if anc not in self._start:
                self._start[anc] = token
            self._stop[anc] = token
        return node_id

    @property
    def root(self):
        "id of the main root node (None for an empty tree)"
        return self._roots[0] if self._roots else None

    def roots(self):
        "ids of all the root nodes, in order of creation"
        return list(self._roots)

    def parent(self, node_id):
        "parent id, or None for the root"
        return self._nodes[node_id].parent

    def children(self, node_id):
        "child ids in source order"
        return self._nodes[node_id].children

    def is_leaf(self, node_id):
        "True if the node wraps a token"
        return self._nodes[node_id].is_leaf()

    def rule_index(self, node_id):
        "grammar rule of a rule node"
        return self._nodes[node_id].rule_index

    def symbol(self, node_id):
        "token wrapped by a leaf node"
        return self._nodes[node_id].symbol

    def start(self, node_id):
        """
        First token spanned by a node (None for a rule with no
        leaves under it)
        """
        if self.is_leaf(node_id):
            return self.symbol(node_id)
        return self._start.get(node_id)

    def stop(self, node_id):
        """
        Last token spanned by a node (None for a rule with no
        leaves under it)
        """
        if self.is_leaf(node_id):
            return self.symbol(node_id)
        return self._stop.get(node_id)

    def width(self, node_id):
        """
        Number of characters from the first character of the
        node's start token to the last of its stop token
        """
        return self.stop(node_id).stop - self.start(node_id).start + 1

    def ancestors(self, node_id):
        """
        Ancestors of a node, from its parent up to the root

        This is a generator: materialise it if you need to walk
        it more than once
        """
        parent = self._nodes[node_id].parent
        while parent is not None:
            yield parent
            parent = self._nodes[parent].parent

    def leaves(self, node_id=None):
        """
        Leaf ids under a node (under every root by default),
        in source order
        """
        if node_id is None:
            stack = list(reversed(self._roots))
        else:
            stack = [node_id]
        while stack:
            current = stack.pop()
            if self.is_leaf(current):
                yield current
            else:
                stack.extend(reversed(self.children(current)))

    def enclosing_rule(self, start_index, stop_index, node_id=None):
        """
        Deepest rule node whose token span covers the tokens from
        stream index `start_index` to `stop_index`, or None if
        nothing does

        :rtype: int or None
        """
        if node_id is None:
            node_id = self.root
            if node_id is None:
                return None
        if self.is_leaf(node_id):
            return None
        start = self.start(node_id)
        stop = self.stop(node_id)
        if start is None:
            return None
        if (start_index < start.token_index or
                stop_index > stop.token_index):
            return None
        # spans nest, so only a covering child can hold a deeper match
        for child in self.children(node_id):
            found = self.enclosing_rule(start_index, stop_index, child)
            if found is not None:
                return found
        return node_id


def index_tree(tree):
    """
    Map every token in the tree (by stream index) to the id of
    the leaf wrapping it

    Raise :py:class:`TreeException` if two leaves wrap the same token

    :rtype: dict(int, int)
    """
    index = {}
    for leaf in tree.leaves():
        token_index = tree.symbol(leaf).token_index
        if token_index in index:
            oops = "Token {} is wrapped by both leaf {} and leaf {}"
            raise TreeException(oops.format(tree.symbol(leaf),
                                            index[token_index], leaf))
        index[token_index] = leaf
    return index
