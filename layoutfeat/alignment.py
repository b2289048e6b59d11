"""
Telling vertical alignment apart from block indentation

A token that starts a line may sit where it does for two reasons:
it is indented one level in from the line above, or it lines up
with some token in the middle of the line above, as in ::

    foo(a,
        b)

Only the second case is alignment. When it happens, we look for
the smallest rule that starts at the token we line up with and
also covers the current token (in the example, the argument list).
"""

from .token import DEFAULT_CHANNEL


def tokens_on_previous_line(tokens, token_index):
    """
    All the on-channel tokens on the nearest line before the one
    holding token `token_index`, in source order (so the first is
    the one at the left edge of that line).

    Empty if there is no such line.

    :type tokens: TokenStream
    :rtype: [Token]
    """
    cur_line = tokens.get(token_index).line
    prev_line = None
    start = None
    for i in range(token_index - 1, -1, -1):
        tok = tokens.get(i)
        if tok.channel == DEFAULT_CHANNEL and tok.line < cur_line:
            prev_line = tok.line
            start = i
            break
    if prev_line is None:
        return []

    online = []
    for i in range(start, -1, -1):
        tok = tokens.get(i)
        if tok.line < prev_line:
            break
        if tok.channel == DEFAULT_CHANNEL and tok.line == prev_line:
            online.append(tok)
    online.reverse()
    return online


def find_aligned_token(line_tokens, target):
    """
    First token in `line_tokens` that starts in the same column
    as `target`, or None
    """
    for tok in line_tokens:
        if tok.column == target.column:
            return tok
    return None


def is_tab_stop(prev_indent, cur_indent, tab_size):
    """
    True if `cur_indent` is a whole number of tabs (at least one)
    to the right of `prev_indent`
    """
    return (cur_indent > prev_indent and
            (cur_indent - prev_indent) % tab_size == 0)


def alignment_ancestor(tree, tokens, token_index, tab_size):
    """
    If the token at `token_index` starts a line by lining up with
    some token on the previous line, return the smallest rule node
    spanning both that starts at the token lined up with.

    The stream position of `tokens` is left as it was.

    Return None if there is no alignment: no previous line, nothing
    in the same column, the match is just the left edge of the
    previous line, the token is indented by whole tabs, or the
    covering rule starts elsewhere.

    :type tree: ParseTree
    :type tokens: TokenStream
    :rtype: int or None
    """
    line_tokens = tokens_on_previous_line(tokens, token_index)
    if not line_tokens:
        return None
    cur_token = tokens.get(token_index)
    aligned = find_aligned_token(line_tokens, cur_token)
    saved = tokens.index()
    tokens.seek(token_index)
    prev_token = tokens.lt(-1)
    tokens.seek(saved)
    starts_line = prev_token is not None and cur_token.line > prev_token.line
    tabbed = is_tab_stop(line_tokens[0].column, cur_token.column, tab_size)
    if (not starts_line or
            aligned is None or
            aligned == line_tokens[0] or
            tabbed):
        return None
    ancestor = tree.enclosing_rule(aligned.token_index,
                                   cur_token.token_index)
    if ancestor is not None and tree.start(ancestor) == aligned:
        return ancestor
    return None
