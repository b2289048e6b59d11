"""
Questions about the ancestors of a parse tree node
"""


def _earliest_ancestor(tree, node, token, boundary):
    """
    Walk up from `node` for as long as `boundary(ancestor)` is
    `token`; return the last node visited that way, or None if
    `node` itself does not qualify
    """
    current = node
    last = None
    while current is not None and boundary(current) == token:
        last = current
        current = tree.parent(current)
    return last


def earliest_ancestor_starting_at_token(tree, node, token):
    """
    Outermost ancestor of `node` (counting `node` itself) that
    starts exactly at `token`

    :rtype: int or None
    """
    return _earliest_ancestor(tree, node, token, tree.start)


def earliest_ancestor_stopping_at_token(tree, node, token):
    """
    Outermost ancestor of `node` (counting `node` itself) that
    stops exactly at `token`

    :rtype: int or None
    """
    return _earliest_ancestor(tree, node, token, tree.stop)


def ancestors(tree, node):
    """
    Ancestors of `node`, nearest first (a one-shot generator)
    """
    return tree.ancestors(node)


def deepest_common_ancestor(tree, node1, node2):
    """
    The nearest ancestor of `node1` that is also an ancestor of
    `node2`, or `node1` itself if both nodes are the same.
    None if the nodes share no ancestor.

    :rtype: int or None
    """
    if node1 == node2:
        return node1
    ancestors2 = list(ancestors(tree, node2))
    for anc in ancestors(tree, node1):
        if anc in ancestors2:
            return anc
    return None
