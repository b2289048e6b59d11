"""
Feature vectors and layout labels for the tokens of a document

For each real token (from the third on, since we need two tokens of
left context) we record what the syntax around it looks like, and
how it was laid out in the original file: newlines and spaces in
front of it, its indentation relative to the previous line and, if
it lines up with something on the previous line, how far up the
tree the construct it lines up with is.
"""

from joblib import (Parallel, delayed)

from .alignment import alignment_ancestor
from .ancestry import (earliest_ancestor_starting_at_token,
                       earliest_ancestor_stopping_at_token)
from .config import ExtractionConfig, DEFAULT_TAB_SIZE
from .features import NO_VALUE
from .table import FeatureTable
from .token import EOF, real_tokens
from .tree import TreeException, index_tree


def _token_type(token):
    "type of a looked-ahead/behind token (EOF off either end)"
    return EOF if token is None else token.type


def _leaf(token_to_leaf, token):
    """
    Leaf node for a token; every on-channel token we ask about
    should have been indexed
    """
    leaf = token_to_leaf.get(token.token_index)
    if leaf is None:
        oops = "Token {} is not in the parse tree index"
        raise TreeException(oops.format(token))
    return leaf


def _ancestor_features(tree, ancestor):
    "rule index and width of an ancestor (sentinels if there is none)"
    if ancestor is None:
        return NO_VALUE, NO_VALUE
    return tree.rule_index(ancestor), tree.width(ancestor)


def node_features(tree, token_to_leaf, tokens, i, file_id=0):
    """
    Feature vector for the token at stream index `i`
    (see :py:data:`layoutfeat.features.FEATURES` for the slots)

    :type tree: ParseTree
    :type token_to_leaf: dict(int, int)
    :type tokens: TokenStream
    :rtype: [int]
    """
    cur_token = tokens.get(i)
    node = _leaf(token_to_leaf, cur_token)

    tokens.seek(i)
    # 4-gram of tokens with the current token in 3rd position
    window = [tokens.lt(-2), tokens.lt(-1), tokens.lt(1), tokens.lt(2)]

    # the token just before
    prev_token = window[1]
    parent = tree.parent(_leaf(token_to_leaf, prev_token))
    prev_rule = tree.rule_index(parent)
    ancestor = earliest_ancestor_stopping_at_token(tree, parent, prev_token)
    prev_ancestor_rule, prev_ancestor_width = \
        _ancestor_features(tree, ancestor)
    prev_end_column = prev_token.end_column()

    # the current token
    parent = tree.parent(node)
    cur_rule = tree.rule_index(parent)
    ancestor = earliest_ancestor_starting_at_token(tree, parent, cur_token)
    ancestor_rule, ancestor_width = _ancestor_features(tree, ancestor)

    return [
        _token_type(window[0]),

        _token_type(window[1]),
        prev_rule,
        prev_end_column,
        prev_ancestor_rule,
        prev_ancestor_width,

        _token_type(window[2]),
        cur_rule,
        ancestor_rule,
        ancestor_width,
        _token_type(window[3]),

        # info
        file_id,
        cur_token.line,
        cur_token.column,
    ]


class FeatureCollector(object):
    """
    Accumulates features and layout labels for one document.

    The token to tree index is built the first time we need it
    and kept for the lifetime of the collector, so a collector
    should not be shared between threads; make one per document.

    :type doc: Document
    """
    def __init__(self, doc, tab_size=DEFAULT_TAB_SIZE, file_id=0):
        self.doc = doc
        self.tree = doc.tree
        self.tokens = doc.tokens
        self.tab_size = tab_size
        self.file_id = file_id
        self.rows = []
        self.features = []
        self.newlines = []
        self.whitespace = []
        self.indent = []
        self.align_depth = []
        self._first_token_on_line = None
        self._token_to_leaf = None

    @property
    def token_to_leaf(self):
        "token index to leaf id map (built on first use)"
        if self._token_to_leaf is None:
            self._token_to_leaf = index_tree(self.tree)
        return self._token_to_leaf

    def compute_feature_vectors(self):
        """
        Process every real token in the document but the first two
        """
        for token in real_tokens(self.tokens)[2:]:
            self.compute_feature_vector_for_token(token.token_index)
        return self

    def _preceding_newlines(self, i, cur_token, prev_token):
        "number of newlines in the hidden text before token i"
        if cur_token.line <= prev_token.line:
            return 0
        return sum(t.text.count("\n")
                   for t in self.tokens.hidden_tokens_to_left(i))

    def _alignment_depth(self, i, cur_token):
        """
        Steps from the token's leaf up to the rule it lines up
        with (0 for the parent, and also 0 if there is no alignment)
        """
        ancestor = alignment_ancestor(self.tree, self.tokens, i,
                                      self.tab_size)
        if ancestor is None:
            return 0
        leaf = _leaf(self.token_to_leaf, cur_token)
        chain = list(self.tree.ancestors(leaf))
        return chain.index(ancestor)

    def compute_feature_vector_for_token(self, i):
        """
        Record the features and labels for the token at stream index `i`
        (tokens with fewer than two real tokens before them are not
        supported, and the end-of-stream token is ignored)
        """
        cur_token = self.tokens.get(i)
        if cur_token.type == EOF:
            return

        self.tokens.seek(i)
        prev_token = self.tokens.lt(-1)

        features = node_features(self.tree, self.token_to_leaf,
                                 self.tokens, i, file_id=self.file_id)

        num_newlines = self._preceding_newlines(i, cur_token, prev_token)
        column_delta = 0
        whitespace = 0
        depth = 0
        if num_newlines > 0:
            if self._first_token_on_line is not None:
                column_delta = (cur_token.column -
                                self._first_token_on_line.column)
            self._first_token_on_line = cur_token
            depth = self._alignment_depth(i, cur_token)
        else:
            # no clamping: overlapping tokens give negative values
            whitespace = cur_token.column - prev_token.end_column()

        self.rows.append(cur_token)
        self.features.append(features)
        self.newlines.append(num_newlines)
        self.whitespace.append(whitespace)
        self.indent.append(column_delta)
        self.align_depth.append(depth)

    def to_table(self):
        """
        Everything recorded so far, as a feature table

        :rtype: FeatureTable
        """
        return FeatureTable.load(self.rows, self.features,
                                 self.newlines, self.whitespace,
                                 self.indent, self.align_depth)


def collect_document(doc, tab_size=DEFAULT_TAB_SIZE, file_id=0):
    """
    Features and labels for all the eligible tokens in a document

    :rtype: FeatureTable
    """
    collector = FeatureCollector(doc, tab_size=tab_size, file_id=file_id)
    return collector.compute_feature_vectors().to_table()


def collect_corpus(docs, config=None):
    """
    Feature tables for a list of documents, one collector per
    document. Documents are numbered in the informational file slot
    by their position in the list, counting from `config.file_id`.

    :type docs: [Document]
    :type config: ExtractionConfig or None
    :rtype: [FeatureTable]
    """
    if config is None:
        config = ExtractionConfig.empty()
    config.sanity_check()
    jobs = [delayed(collect_document)(doc, config.tab_size, file_id)
            for file_id, doc in enumerate(docs, start=config.file_id)]
    return Parallel(n_jobs=config.n_jobs)(jobs)
