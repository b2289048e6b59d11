"""
layoutfeat tests
"""

# pylint: disable=too-few-public-methods, no-self-use, invalid-name

import json
import os
import re
import shutil
import tempfile
import unittest

import numpy as np

from .alignment import (alignment_ancestor, find_aligned_token,
                        is_tab_stop, tokens_on_previous_line)
from .ancestry import (ancestors, deepest_common_ancestor,
                       earliest_ancestor_starting_at_token,
                       earliest_ancestor_stopping_at_token)
from .collect import (FeatureCollector, collect_corpus, collect_document,
                      node_features)
from .config import ConfigException, ExtractionConfig
from .document import Document
from .features import (FEATURES, INDEX_ANCESTOR_WIDTH,
                       INDEX_EARLIEST_ANCESTOR, INDEX_TYPE,
                       MAX_L0_DISTANCE_COUNT,
                       NUM_FEATURES, FeatureType, current_token_type,
                       feature_names, info_charpos, info_line)
from .io import IoException, load_document, load_features, save_features
from .report import (feature_name_header, feature_vector_to_string,
                     label_summary, show_feature_table)
from .table import FeatureTable, FeatureTableException
from .token import (EOF, HIDDEN_CHANNEL, DEFAULT_CHANNEL, Token,
                    TokenStream, real_tokens)
from .tree import ParseTree, TreeException, index_tree
from .util import abbreviate_middle, center

# ---------------------------------------------------------------------
# a toy lexer and tree builder for test documents
# ---------------------------------------------------------------------

WS = 1
ID = 2
LPAREN = 3
RPAREN = 4
COMMA = 5
LBRACE = 6
RBRACE = 7
SEMI = 8
EQUALS = 9

VOCABULARY = ["<INVALID>", "WS", "ID", "'('", "')'", "','", "'{'", "'}'",
              "';'", "'='"]

STAT = 0
CALL = 1
ARGS = 2
EXPR = 3
BLOCK = 4

RULE_NAMES = ["statement", "call", "arguments", "expression", "block"]

_PUNCT = {"(": LPAREN, ")": RPAREN, ",": COMMA, "{": LBRACE,
          "}": RBRACE, ";": SEMI, "=": EQUALS}
_LEXEME = re.compile(r"\s+|\w+|.")


def lex(text):
    """
    Tokens for a bit of text: whitespace runs are hidden,
    words are identifiers, anything else is punctuation. An
    end-of-stream token comes last.
    """
    tokens = []
    line = 1
    column = 0
    for match in _LEXEME.finditer(text):
        lexeme = match.group()
        if lexeme.isspace():
            ttype, channel = WS, HIDDEN_CHANNEL
        elif re.match(r"\w", lexeme):
            ttype, channel = ID, DEFAULT_CHANNEL
        else:
            ttype, channel = _PUNCT[lexeme], DEFAULT_CHANNEL
        tokens.append(Token(type=ttype, channel=channel,
                            line=line, column=column, text=lexeme,
                            token_index=len(tokens),
                            start=match.start(), stop=match.end() - 1))
        newlines = lexeme.count("\n")
        if newlines:
            line += newlines
            column = len(lexeme) - lexeme.rfind("\n") - 1
        else:
            column += len(lexeme)
    tokens.append(Token(type=EOF, channel=DEFAULT_CHANNEL,
                        line=line, column=column, text="<EOF>",
                        token_index=len(tokens),
                        start=len(text), stop=len(text) - 1))
    return tokens


def mk_tree(real, shape):
    """
    Parse tree from nested `(rule, [children])` tuples where
    a leaf is the position of its token among the real tokens
    """
    tree = ParseTree()

    def add(node, parent):
        "add a rule and everything under it"
        rule, children = node
        node_id = tree.add_rule(rule, parent)
        for child in children:
            if isinstance(child, tuple):
                add(child, node_id)
            else:
                tree.add_leaf(real[child], node_id)

    add(shape, None)
    return tree


def mk_doc(text, shape):
    "test document from text and tree shape"
    tokens = lex(text)
    tree = mk_tree(real_tokens(tokens), shape)
    return Document.make(tokens, tree, name="test",
                         vocabulary=VOCABULARY, rule_names=RULE_NAMES)


def leaf_of(doc, token):
    "leaf node for a token"
    return index_tree(doc.tree)[token.token_index]


# print(a,
#       b);
CALL_TEXT = "print(a,\n      b);"
CALL_SHAPE = (STAT, [(CALL, [0, 1,
                            (ARGS, [(EXPR, [2]), 3, (EXPR, [4])]),
                            5]),
                    6])

# if (x) {
#     y;
# }
IF_TEXT = "if (x) {\n    y;\n}"
IF_SHAPE = (STAT, [0, 1, (EXPR, [2]), 3,
                  (BLOCK, [4, (STAT, [(EXPR, [5]), 6]), 7])])

# f(a, c,
#      d)
MISALIGNED_TEXT = "f(a, c,\n     d)"
MISALIGNED_SHAPE = (CALL, [0, 1,
                          (ARGS, [(EXPR, [2]), 3, (EXPR, [4]), 5,
                                  (EXPR, [6])]),
                          7])

# foo(a,
#     b)
FOO_TEXT = "foo(a,\n    b)"
FOO_SHAPE = (CALL, [0, 1, (ARGS, [(EXPR, [2]), 3, (EXPR, [4])]), 5])

SPACED_TEXT = "a b   c;"
SPACED_SHAPE = (STAT, [(EXPR, [0, 1, 2]), 3])

BLANK_TEXT = "a = b;\n\nc = d;"
BLANK_SHAPE = (BLOCK, [(STAT, [(EXPR, [0]), 1, (EXPR, [2]), 3]),
                      (STAT, [(EXPR, [4]), 5, (EXPR, [6]), 7])])


# ---------------------------------------------------------------------
# tokens
# ---------------------------------------------------------------------


class TokenStreamTest(unittest.TestCase):
    '''
    look-around and filtering on token streams
    '''
    tokens = TokenStream(lex("a = b;"))

    def test_lex(self):
        'sanity check the test lexer itself'
        texts = [t.text for t in self.tokens]
        self.assertEqual(["a", " ", "=", " ", "b", ";", "<EOF>"], texts)
        self.assertEqual(4, self.tokens.get(4).column)
        self.assertEqual(4, self.tokens.get(4).start)

    def test_lt_skips_hidden(self):
        'look-around only sees on-channel tokens'
        self.tokens.seek(4)
        self.assertEqual("b", self.tokens.lt(1).text)
        self.assertEqual("=", self.tokens.lt(-1).text)
        self.assertEqual("a", self.tokens.lt(-2).text)
        self.assertEqual(";", self.tokens.lt(2).text)
        self.assertEqual(EOF, self.tokens.lt(3).type)
        self.assertIsNone(self.tokens.lt(-3))
        self.assertIsNone(self.tokens.lt(4))
        self.assertRaises(ValueError, self.tokens.lt, 0)

    def test_hidden_tokens_to_left(self):
        'the whitespace run just before a token'
        hidden = self.tokens.hidden_tokens_to_left(4)
        self.assertEqual([" "], [t.text for t in hidden])
        self.assertEqual([], self.tokens.hidden_tokens_to_left(5))
        self.assertEqual([], self.tokens.hidden_tokens_to_left(0))

    def test_real_tokens(self):
        'real tokens keep their order, minus hidden and EOF'
        tokens = lex("a  (\n b)")
        real = real_tokens(tokens)
        self.assertEqual(["a", "(", "b", ")"], [t.text for t in real])
        indices = [t.token_index for t in real]
        self.assertEqual(sorted(indices), indices)
        self.assertTrue(all(t.channel == DEFAULT_CHANNEL for t in real))
        self.assertTrue(all(t.type != EOF for t in real))

    def test_end_column(self):
        'end column is just past the text'
        self.assertEqual(5, Token(ID, DEFAULT_CHANNEL, 1, 2, "abc",
                                  0, 2, 4).end_column())


# ---------------------------------------------------------------------
# trees and ancestors
# ---------------------------------------------------------------------


class TreeTest(unittest.TestCase):
    '''
    arena trees and the token index
    '''
    doc = mk_doc(CALL_TEXT, CALL_SHAPE)

    def test_spans(self):
        'rule spans follow the leaves added under them'
        tree = self.doc.tree
        root = tree.root
        self.assertEqual("print", tree.start(root).text)
        self.assertEqual(";", tree.stop(root).text)
        call = tree.children(root)[0]
        self.assertEqual(CALL, tree.rule_index(call))
        self.assertEqual(")", tree.stop(call).text)
        # print(a,\n      b) is 17 characters
        self.assertEqual(17, tree.width(call))

    def test_index_tree(self):
        'every on-channel token has exactly one leaf'
        index = index_tree(self.doc.tree)
        real = real_tokens(self.doc.tokens)
        self.assertEqual(sorted(t.token_index for t in real),
                         sorted(index.keys()))
        for tok in real:
            self.assertEqual(tok, self.doc.tree.symbol(index[tok.token_index]))

    def test_index_duplicate_leaf(self):
        'a token wrapped twice is an error'
        tokens = lex("a b")
        tree = ParseTree()
        root = tree.add_rule(EXPR)
        tree.add_leaf(tokens[0], root)
        tree.add_leaf(tokens[2], root)
        tree.add_leaf(tokens[0], root)
        self.assertRaises(TreeException, index_tree, tree)

    def test_index_empty_tree(self):
        'no leaves, no index'
        self.assertEqual({}, index_tree(ParseTree()))

    def test_enclosing_rule(self):
        'smallest rule covering a region'
        tree = self.doc.tree
        real = real_tokens(self.doc.tokens)
        args = tree.enclosing_rule(real[2].token_index,
                                   real[4].token_index)
        self.assertEqual(ARGS, tree.rule_index(args))
        expr = tree.enclosing_rule(real[2].token_index,
                                   real[2].token_index)
        self.assertEqual(EXPR, tree.rule_index(expr))
        everything = tree.enclosing_rule(real[0].token_index,
                                         real[6].token_index)
        self.assertEqual(tree.root, everything)
        self.assertIsNone(ParseTree().enclosing_rule(0, 0))

    def test_bad_parent(self):
        'leaves cannot have children, parents must exist'
        tree = ParseTree()
        root = tree.add_rule(STAT)
        leaf = tree.add_leaf(lex("a")[0], root)
        self.assertRaises(TreeException, tree.add_rule, EXPR, leaf)
        self.assertRaises(TreeException, tree.add_rule, EXPR, 42)


class AncestryTest(unittest.TestCase):
    '''
    ancestor walks
    '''
    doc = mk_doc(CALL_TEXT, CALL_SHAPE)
    real = real_tokens(doc.tokens)

    def test_ancestors(self):
        'nearest first, up to the root'
        tree = self.doc.tree
        leaf = leaf_of(self.doc, self.real[4])
        rules = [tree.rule_index(n) for n in ancestors(tree, leaf)]
        self.assertEqual([EXPR, ARGS, CALL, STAT], rules)
        self.assertEqual([], list(ancestors(tree, tree.root)))

    def test_starting_at(self):
        'outermost ancestor starting at a token'
        tree = self.doc.tree
        tok_a = self.real[2]
        parent = tree.parent(leaf_of(self.doc, tok_a))
        anc = earliest_ancestor_starting_at_token(tree, parent, tok_a)
        self.assertEqual(ARGS, tree.rule_index(anc))
        tok_print = self.real[0]
        parent = tree.parent(leaf_of(self.doc, tok_print))
        anc = earliest_ancestor_starting_at_token(tree, parent, tok_print)
        self.assertEqual(tree.root, anc)

    def test_starting_at_none(self):
        'nothing if the immediate node does not start there'
        tree = self.doc.tree
        tok_comma = self.real[3]
        parent = tree.parent(leaf_of(self.doc, tok_comma))
        self.assertIsNone(earliest_ancestor_starting_at_token(tree, parent,
                                                              tok_comma))

    def test_stopping_at(self):
        'outermost ancestor stopping at a token'
        tree = self.doc.tree
        tok_b = self.real[4]
        parent = tree.parent(leaf_of(self.doc, tok_b))
        anc = earliest_ancestor_stopping_at_token(tree, parent, tok_b)
        self.assertEqual(ARGS, tree.rule_index(anc))
        tok_lparen = self.real[1]
        parent = tree.parent(leaf_of(self.doc, tok_lparen))
        self.assertIsNone(earliest_ancestor_stopping_at_token(tree, parent,
                                                              tok_lparen))

    def test_deepest_common_ancestor(self):
        'nearest shared ancestor'
        tree = self.doc.tree
        leaf_a = leaf_of(self.doc, self.real[2])
        leaf_b = leaf_of(self.doc, self.real[4])
        leaf_semi = leaf_of(self.doc, self.real[6])
        dca = deepest_common_ancestor(tree, leaf_a, leaf_b)
        self.assertEqual(ARGS, tree.rule_index(dca))
        self.assertEqual(tree.root,
                         deepest_common_ancestor(tree, leaf_a, leaf_semi))
        for node in range(len(tree)):
            self.assertEqual(node,
                             deepest_common_ancestor(tree, node, node))

    def test_disjoint_trees(self):
        'no common ancestor across separate roots'
        tokens = lex("a b")
        tree = ParseTree()
        root1 = tree.add_rule(EXPR)
        leaf1 = tree.add_leaf(tokens[0], root1)
        root2 = tree.add_rule(EXPR)
        leaf2 = tree.add_leaf(tokens[2], root2)
        self.assertEqual([root1, root2], tree.roots())
        self.assertIsNone(deepest_common_ancestor(tree, leaf1, leaf2))
        self.assertIsNone(deepest_common_ancestor(tree, root1, root2))
        self.assertEqual(2, len(index_tree(tree)))


# ---------------------------------------------------------------------
# alignment
# ---------------------------------------------------------------------


class AlignmentTest(unittest.TestCase):
    '''
    alignment versus indentation
    '''
    def test_previous_line(self):
        'on-channel tokens of the line above'
        doc = mk_doc(IF_TEXT, IF_SHAPE)
        real = real_tokens(doc.tokens)
        above_y = tokens_on_previous_line(doc.tokens, real[5].token_index)
        self.assertEqual(["if", "(", "x", ")", "{"],
                         [t.text for t in above_y])
        above_brace = tokens_on_previous_line(doc.tokens,
                                              real[7].token_index)
        self.assertEqual(["y", ";"], [t.text for t in above_brace])
        self.assertEqual([], tokens_on_previous_line(doc.tokens,
                                                     real[2].token_index))

    def test_find_aligned_token(self):
        'first token in the same column'
        doc = mk_doc(CALL_TEXT, CALL_SHAPE)
        real = real_tokens(doc.tokens)
        self.assertEqual(real[2], find_aligned_token(real[:4], real[4]))
        self.assertIsNone(find_aligned_token(real[:2], real[4]))

    def test_tab_stop(self):
        'whole tabs to the right'
        self.assertTrue(is_tab_stop(0, 4, 4))
        self.assertTrue(is_tab_stop(2, 10, 4))
        self.assertFalse(is_tab_stop(0, 6, 4))
        self.assertFalse(is_tab_stop(4, 4, 4))
        self.assertFalse(is_tab_stop(8, 4, 4))

    def test_aligned_argument(self):
        'continuation lines up with the first argument'
        doc = mk_doc(CALL_TEXT, CALL_SHAPE)
        real = real_tokens(doc.tokens)
        anc = alignment_ancestor(doc.tree, doc.tokens,
                                 real[4].token_index, 4)
        self.assertIsNotNone(anc)
        self.assertEqual(ARGS, doc.tree.rule_index(anc))
        self.assertEqual(real[2], doc.tree.start(anc))

    def test_tab_indent_is_not_alignment(self):
        'a block body one tab in lines up by accident'
        doc = mk_doc(IF_TEXT, IF_SHAPE)
        real = real_tokens(doc.tokens)
        # y is in the same column as x, but also one tab in
        self.assertEqual(real[2].column, real[5].column)
        self.assertIsNone(alignment_ancestor(doc.tree, doc.tokens,
                                             real[5].token_index, 4))
        # with wider tabs this would be alignment, if x started the
        # common ancestor; it does not
        self.assertIsNone(alignment_ancestor(doc.tree, doc.tokens,
                                             real[5].token_index, 8))

    def test_left_edge_is_not_alignment(self):
        'lining up with the start of the previous line is just indent'
        doc = mk_doc("a;\nb;", (BLOCK, [(STAT, [0, 1]), (STAT, [2, 3])]))
        real = real_tokens(doc.tokens)
        self.assertIsNone(alignment_ancestor(doc.tree, doc.tokens,
                                             real[2].token_index, 4))

    def test_common_ancestor_starts_elsewhere(self):
        'lining up with a middle argument does not count'
        doc = mk_doc(MISALIGNED_TEXT, MISALIGNED_SHAPE)
        real = real_tokens(doc.tokens)
        self.assertEqual(real[4].column, real[6].column)
        self.assertIsNone(alignment_ancestor(doc.tree, doc.tokens,
                                             real[6].token_index, 4))

    def test_stream_position_kept(self):
        'looking for alignment does not move the stream'
        doc = mk_doc(CALL_TEXT, CALL_SHAPE)
        real = real_tokens(doc.tokens)
        doc.tokens.seek(real[1].token_index)
        alignment_ancestor(doc.tree, doc.tokens, real[4].token_index, 4)
        self.assertEqual(real[1].token_index, doc.tokens.index())

    def test_tab_size_decides(self):
        'an argument one tab in is alignment only with wider tabs'
        doc = mk_doc(FOO_TEXT, FOO_SHAPE)
        real = real_tokens(doc.tokens)
        self.assertEqual(4, real[4].column)
        self.assertIsNone(alignment_ancestor(doc.tree, doc.tokens,
                                             real[4].token_index, 4))
        anc = alignment_ancestor(doc.tree, doc.tokens,
                                 real[4].token_index, 8)
        self.assertEqual(ARGS, doc.tree.rule_index(anc))

    def test_first_line(self):
        'nothing above the first line'
        doc = mk_doc(SPACED_TEXT, SPACED_SHAPE)
        real = real_tokens(doc.tokens)
        self.assertIsNone(alignment_ancestor(doc.tree, doc.tokens,
                                             real[2].token_index, 4))


# ---------------------------------------------------------------------
# features and labels
# ---------------------------------------------------------------------


class FeatureMetaDataTest(unittest.TestCase):
    '''
    the slot table
    '''
    def test_shape(self):
        'one entry per slot'
        self.assertEqual(NUM_FEATURES, len(FEATURES))
        self.assertEqual(NUM_FEATURES, len(feature_names()))
        self.assertEqual(FeatureType.token, FEATURES[INDEX_TYPE].type)

    def test_max_distance(self):
        'the distance bound is the sum of the costs'
        self.assertEqual(sum(f.mismatch_cost for f in FEATURES),
                         MAX_L0_DISTANCE_COUNT)
        self.assertEqual(17, MAX_L0_DISTANCE_COUNT)
        for feat in FEATURES:
            if feat.type.is_info():
                self.assertEqual(0, feat.mismatch_cost)


class FeatureCollectorTest(unittest.TestCase):
    '''
    per token features and labels
    '''
    def test_call_features(self):
        'all the slots for the aligned argument'
        doc = mk_doc(CALL_TEXT, CALL_SHAPE)
        real = real_tokens(doc.tokens)
        feats = node_features(doc.tree, index_tree(doc.tree), doc.tokens,
                              real[4].token_index)
        self.assertEqual([ID, COMMA, ARGS, 8, -1, -1,
                          ID, EXPR, EXPR, 1, RPAREN,
                          0, 2, 6],
                         feats)

    def test_ancestor_widths(self):
        'ancestors that start and stop at a token'
        doc = mk_doc(CALL_TEXT, CALL_SHAPE)
        real = real_tokens(doc.tokens)
        index = index_tree(doc.tree)
        feats_a = node_features(doc.tree, index, doc.tokens,
                                real[2].token_index)
        self.assertEqual(ARGS, feats_a[INDEX_EARLIEST_ANCESTOR])
        self.assertEqual(10, feats_a[INDEX_ANCESTOR_WIDTH])
        feats_rparen = node_features(doc.tree, index, doc.tokens,
                                     real[5].token_index)
        self.assertEqual([COMMA, ID, EXPR, 7, ARGS, 10,
                          RPAREN, CALL, -1, -1, SEMI,
                          0, 2, 7],
                         feats_rparen)

    def test_collector_call(self):
        'labels for an aligned continuation line'
        doc = mk_doc(CALL_TEXT, CALL_SHAPE)
        collector = FeatureCollector(doc, tab_size=4)
        collector.compute_feature_vectors()
        real = real_tokens(doc.tokens)
        self.assertEqual(len(real) - 2, len(collector.features))
        for feats, tok in zip(collector.features, real[2:]):
            self.assertEqual(NUM_FEATURES, len(feats))
            self.assertEqual(tok.type, current_token_type(feats))
            self.assertEqual(tok.line, info_line(feats))
            self.assertEqual(tok.column, info_charpos(feats))
        # rows: a , b ) ;
        self.assertEqual([0, 0, 1, 0, 0], collector.newlines)
        self.assertEqual([0, 0, 0, 0, 0], collector.whitespace)
        self.assertEqual([0, 0, 0, 0, 0], collector.indent)
        # b lines up with the arguments, one step above its expression
        self.assertEqual([0, 0, 1, 0, 0], collector.align_depth)

    def test_collector_if(self):
        'block indentation is not alignment'
        doc = mk_doc(IF_TEXT, IF_SHAPE)
        table = collect_document(doc, tab_size=4)
        # rows: x ) { y ; }
        self.assertEqual([0, 0, 0, 1, 0, 1], list(table.newlines))
        self.assertEqual([0, 0, 1, 0, 0, 0], list(table.whitespace))
        self.assertEqual([0, 0, 0, 0, 0, -4], list(table.indent))
        self.assertEqual([0, 0, 0, 0, 0, 0], list(table.align_depth))

    def test_whitespace(self):
        'spaces between tokens on the same line'
        doc = mk_doc(SPACED_TEXT, SPACED_SHAPE)
        table = collect_document(doc)
        # rows: c ;
        self.assertEqual([3, 0], list(table.whitespace))
        self.assertEqual([0, 0], list(table.newlines))

    def test_blank_lines(self):
        'newlines in the hidden text before a token'
        doc = mk_doc(BLANK_TEXT, BLANK_SHAPE)
        table = collect_document(doc)
        # rows: b ; c = d ;
        self.assertEqual([0, 0, 2, 0, 0, 0], list(table.newlines))
        self.assertEqual(["b", ";", "c", "=", "d", ";"],
                         [t.text for t in table.tokens])

    def test_overlapping_tokens(self):
        'whitespace goes negative when tokens overlap'
        tokens = lex("a bbb c")
        # pull c back inside bbb, which ends at column 5
        tokens[4] = tokens[4]._replace(column=3)
        tree = mk_tree(real_tokens(tokens), (EXPR, [0, 1, 2]))
        doc = Document.make(tokens, tree)
        table = collect_document(doc)
        self.assertEqual([-2], list(table.whitespace))
        self.assertEqual([0], list(table.newlines))

    def test_later_line_without_newline(self):
        'a line change with no newline in the hidden text'
        tokens = lex("a b c")
        tokens[4] = tokens[4]._replace(line=2)
        tree = mk_tree(real_tokens(tokens), (EXPR, [0, 1, 2]))
        doc = Document.make(tokens, tree)
        table = collect_document(doc)
        self.assertEqual([0], list(table.newlines))
        self.assertEqual([1], list(table.whitespace))
        self.assertEqual([0], list(table.indent))
        self.assertEqual([0], list(table.align_depth))

    def test_collector_tab_size(self):
        'the same text with narrow and wide tabs'
        doc = mk_doc(FOO_TEXT, FOO_SHAPE)
        # rows: a , b )
        narrow = collect_document(doc, tab_size=4)
        self.assertEqual([0, 0, 1, 0], list(narrow.newlines))
        self.assertEqual([0, 0, 0, 0], list(narrow.align_depth))
        wide = collect_document(doc, tab_size=8)
        self.assertEqual([0, 0, 1, 0], list(wide.newlines))
        self.assertEqual([0, 0, 1, 0], list(wide.align_depth))

    def test_eof_skipped(self):
        'no row for the end of stream'
        doc = mk_doc(SPACED_TEXT, SPACED_SHAPE)
        collector = FeatureCollector(doc)
        eof = doc.tokens.get(len(doc.tokens) - 1)
        self.assertEqual(EOF, eof.type)
        collector.compute_feature_vector_for_token(eof.token_index)
        self.assertEqual([], collector.features)

    def test_lazy_index(self):
        'the index is built once, on demand'
        doc = mk_doc(SPACED_TEXT, SPACED_SHAPE)
        collector = FeatureCollector(doc)
        self.assertIsNone(collector._token_to_leaf)
        collector.compute_feature_vectors()
        index = collector._token_to_leaf
        self.assertIsNotNone(index)
        collector.compute_feature_vector_for_token(
            real_tokens(doc.tokens)[2].token_index)
        self.assertIs(index, collector._token_to_leaf)

    def test_missing_leaf(self):
        'tokens missing from the index are a hard error'
        doc = mk_doc(SPACED_TEXT, SPACED_SHAPE)
        real = real_tokens(doc.tokens)
        index = index_tree(doc.tree)
        del index[real[1].token_index]
        self.assertRaises(TreeException, node_features,
                          doc.tree, index, doc.tokens, real[2].token_index)

    def test_short_documents(self):
        'fewer than three real tokens give an empty table'
        doc = mk_doc("a;", (STAT, [0, 1]))
        table = collect_document(doc)
        self.assertEqual(0, table.num_rows)
        self.assertEqual((0, NUM_FEATURES), table.features.shape)

    def test_corpus(self):
        'one table per document, numbered'
        docs = [mk_doc(CALL_TEXT, CALL_SHAPE), mk_doc(IF_TEXT, IF_SHAPE)]
        tables = collect_corpus(docs, ExtractionConfig.empty())
        self.assertEqual(2, len(tables))
        self.assertEqual(5, tables[0].num_rows)
        self.assertEqual(6, tables[1].num_rows)
        self.assertTrue(all(row[11] == 0 for row in tables[0].features))
        self.assertTrue(all(row[11] == 1 for row in tables[1].features))
        tables = collect_corpus(docs,
                                ExtractionConfig.empty()._replace(file_id=5))
        self.assertTrue(all(row[11] == 5 for row in tables[0].features))
        self.assertTrue(all(row[11] == 6 for row in tables[1].features))


class ConfigTest(unittest.TestCase):
    '''
    extraction settings
    '''
    def test_sanity_check(self):
        'bad tab sizes and job counts'
        config = ExtractionConfig.empty()
        self.assertIs(config, config.sanity_check())
        self.assertRaises(ConfigException,
                          config._replace(tab_size=0).sanity_check)
        self.assertRaises(ConfigException,
                          config._replace(n_jobs=0).sanity_check)
        config._replace(n_jobs=-1).sanity_check()
        self.assertRaises(ConfigException, collect_corpus, [],
                          config._replace(tab_size=-2))


# ---------------------------------------------------------------------
# tables
# ---------------------------------------------------------------------


class FeatureTableTest(unittest.TestCase):
    '''
    stacking and checking tables
    '''
    doc1 = mk_doc(CALL_TEXT, CALL_SHAPE)
    doc2 = mk_doc(IF_TEXT, IF_SHAPE)

    def test_vstack(self):
        'stacking keeps rows in order'
        table1 = collect_document(self.doc1)
        table2 = collect_document(self.doc2)
        both = FeatureTable.vstack([table1, table2])
        self.assertEqual(table1.num_rows + table2.num_rows, both.num_rows)
        both.sanity_check()
        self.assertEqual(list(table2.indent),
                         list(both.indent[table1.num_rows:]))
        self.assertRaises(ValueError, FeatureTable.vstack, [])

    def test_sanity_check(self):
        'mismatched columns'
        table = collect_document(self.doc1)
        bad = table._replace(newlines=table.newlines[1:])
        self.assertRaises(FeatureTableException, bad.sanity_check)
        bad = table._replace(features=table.features[:, 1:])
        self.assertRaises(FeatureTableException, bad.sanity_check)
        self.assertRaises(FeatureTableException, table.labels, "colour")

    def test_replace(self):
        'tables are ordinary named tuples, whatever their size'
        for doc in [self.doc1, self.doc2, mk_doc("a;", (STAT, [0, 1]))]:
            table = collect_document(doc)
            copy = table._replace(indent=table.indent * 0)
            self.assertEqual(table.num_rows, copy.num_rows)
            self.assertEqual(6, len(copy))
            self.assertEqual([0] * table.num_rows, list(copy.indent))

    def test_line_starts(self):
        'only tokens starting a line'
        table = collect_document(self.doc2).line_starts()
        self.assertEqual(["y", "}"], [t.text for t in table.tokens])
        self.assertEqual([0, -4], list(table.indent))


# ---------------------------------------------------------------------
# reports
# ---------------------------------------------------------------------


class ReportTest(unittest.TestCase):
    '''
    text rendering
    '''
    def test_util(self):
        'abbreviating and centring'
        self.assertEqual("ab*f", abbreviate_middle("abcdef", "*", 4))
        self.assertEqual("abc", abbreviate_middle("abc", "*", 4))
        self.assertEqual(" ab  ", center("ab", 5))
        self.assertEqual("abcdef", center("abcdef", 3))

    def test_header(self):
        'two rows of names and a separator'
        rows = feature_name_header().rstrip("\n").split("\n")
        self.assertEqual(3, len(rows))
        self.assertEqual(len(rows[0]), len(rows[1]))
        self.assertEqual(len(rows[0]), len(rows[2]))
        self.assertTrue(set(rows[2]) <= set("=| "))

    def test_vector(self):
        'vectors line up with the header'
        doc = mk_doc(CALL_TEXT, CALL_SHAPE)
        table = collect_document(doc)
        header = feature_name_header().split("\n")[0]
        for feats in table.features:
            line = feature_vector_to_string(feats, VOCABULARY, RULE_NAMES)
            self.assertEqual(len(header), len(line))
        line = feature_vector_to_string(table.features[2], VOCABULARY,
                                        RULE_NAMES)
        self.assertIn("arguments", line)
        self.assertIn("| ", line)

    def test_show_table(self):
        'table and summary mention every label'
        doc = mk_doc(IF_TEXT, IF_SHAPE)
        table = collect_document(doc)
        shown = show_feature_table(table, VOCABULARY, RULE_NAMES)
        self.assertEqual(3 + table.num_rows, len(shown.split("\n")))
        summary = label_summary(table)
        for name in ["newlines", "whitespace", "indent", "align_depth"]:
            self.assertIn(name, summary)


# ---------------------------------------------------------------------
# io
# ---------------------------------------------------------------------


def _jtree(tree, node):
    "nested json for a parse tree"
    if tree.is_leaf(node):
        return tree.symbol(node).token_index
    return {"rule": tree.rule_index(node),
            "children": [_jtree(tree, c) for c in tree.children(node)]}


def write_json_doc(doc, path):
    "save a test document the way a parser front end would"
    jdoc = {"name": doc.name,
            "vocabulary": doc.vocabulary,
            "rule_names": doc.rule_names,
            "tokens": [[t.type, t.channel, t.line, t.column, t.text,
                        t.start, t.stop] for t in doc.tokens],
            "tree": _jtree(doc.tree, doc.tree.root)}
    with open(path, "w") as stream:
        json.dump(jdoc, stream)


class IoTest(unittest.TestCase):
    '''
    reading documents, writing tables
    '''
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_load_document(self):
        'a saved document gives the same features'
        doc = mk_doc(CALL_TEXT, CALL_SHAPE)
        path = os.path.join(self.tmpdir, "call.json")
        write_json_doc(doc, path)
        loaded = load_document(path)
        self.assertEqual(list(doc.tokens), list(loaded.tokens))
        self.assertEqual(RULE_NAMES, loaded.rule_names)
        expected = collect_document(doc)
        got = collect_document(loaded)
        self.assertTrue(np.array_equal(expected.features, got.features))
        self.assertTrue(np.array_equal(expected.align_depth,
                                       got.align_depth))

    def test_load_bad_document(self):
        'complain about broken files'
        path = os.path.join(self.tmpdir, "bad.json")
        with open(path, "w") as stream:
            json.dump({"tokens": [[1, 0, 1]]}, stream)
        self.assertRaises(IoException, load_document, path)
        with open(path, "w") as stream:
            json.dump({"tokens": [], "tree": {"rule": 0,
                                              "children": [3]}}, stream)
        self.assertRaises(IoException, load_document, path)
        with open(path, "w") as stream:
            stream.write("{not json")
        self.assertRaises(IoException, load_document, path)

    def test_save_features(self):
        'svmlight output keeps the sentinels'
        table = collect_document(mk_doc(CALL_TEXT, CALL_SHAPE))
        path = os.path.join(self.tmpdir, "call.svmlight")
        save_features(table, path, label="align_depth")
        data, target = load_features(path)
        self.assertTrue(np.array_equal(table.features, data))
        self.assertEqual(list(table.align_depth), list(target))


# ---------------------------------------------------------------------
# document model
# ---------------------------------------------------------------------


def test_display_names():
    """Names for token types and rules, with numeric fallbacks"""
    doc = mk_doc(SPACED_TEXT, SPACED_SHAPE)
    assert doc.token_name(ID) == "ID"
    assert doc.token_name(EOF) == "EOF"
    assert doc.token_name(42) == "42"
    assert doc.rule_name(EXPR) == "expression"
    assert doc.rule_name(42) == "42"
    bare = Document.make(lex("a"), ParseTree())
    assert bare.token_name(ID) == str(ID)
    assert bare.rule_name(STAT) == str(STAT)


def test_feature_names():
    """One distinct name per slot"""
    names = feature_names()
    assert len(set(names)) == NUM_FEATURES
    assert names[INDEX_TYPE] == "6:LT(1)"
