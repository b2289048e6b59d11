"""
Saving and loading documents and feature tables
"""

import codecs
import json
import sys
import time
import traceback

import numpy as np
from sklearn.datasets import dump_svmlight_file, load_svmlight_file

from .document import Document
from .features import NUM_FEATURES, feature_names
from .token import DEFAULT_CHANNEL, Token, TokenStream
from .tree import ParseTree

# pylint: disable=too-few-public-methods


class IoException(Exception):
    """
    Exceptions related to reading/writing data
    """
    def __init__(self, msg):
        super(IoException, self).__init__(msg)

# ---------------------------------------------------------------------
# feedback
# ---------------------------------------------------------------------


# pylint: disable=redefined-builtin, invalid-name
class Torpor(object):
    """
    Announce that we're about to do something, then do it,
    then say we're done.

    Usage: ::

        with Torpor("doing a slow thing"):
            some_slow_thing

    Output (1): ::

        doing a slow thing...

    Output (2a): ::

        doing a slow thing... done

    Output (2b): ::

        doing a slow thing... ERROR
        <stack trace>

    :param quiet: True to skip the message altogether
    """
    def __init__(self, msg,
                 sameline=True,
                 quiet=False,
                 file=sys.stderr):
        self._msg = msg
        self._file = file
        self._sameline = sameline
        self._quiet = quiet
        self._start = 0
        self._end = 0

    def __enter__(self):
        # wall time, since we want IO included
        self._start = time.time()
        if self._quiet:
            return
        elif self._sameline:
            print(self._msg, end="... ", file=self._file)
        else:
            print("[start]", self._msg, file=self._file)

    def __exit__(self, type, value, tb):
        self._end = time.time()
        if tb is None:
            if not self._quiet:
                done = "done" if self._sameline else "[-end-] " + self._msg
                ms_elapsed = 1000 * (self._end - self._start)
                final_msg = "{} [{:.0f} ms]".format(done, ms_elapsed)
                print(final_msg, file=self._file)
        else:
            if not self._quiet:
                oops = "ERROR!" if self._sameline else "ERROR! " + self._msg
                print(oops, file=self._file)
            traceback.print_exception(type, value, tb)
            sys.exit(1)
# pylint: enable=redefined-builtin, invalid-name


# ---------------------------------------------------------------------
# documents
# ---------------------------------------------------------------------

_TOKEN_FIELDS = ["type", "channel", "line", "column", "text",
                 "start", "stop"]


def _read_token(doc_file, i, row):
    """
    interpret a single token entry, either a list in
    `_TOKEN_FIELDS` order or a dictionary with those keys
    (channel is optional in the dictionary form)
    """
    if isinstance(row, dict):
        row = dict(row)
        row.setdefault("channel", DEFAULT_CHANNEL)
        missing = [k for k in _TOKEN_FIELDS if k not in row]
        if missing:
            oops = ('Token {num} in {dfile} is missing the fields: '
                    '{fields}')
            raise IoException(oops.format(num=i, dfile=doc_file,
                                          fields=', '.join(missing)))
        values = [row[k] for k in _TOKEN_FIELDS]
    elif len(row) == len(_TOKEN_FIELDS):
        values = list(row)
    else:
        oops = ('Token {num} in {dfile} has {count} elements instead of '
                'the expected {expected}: {row}')
        raise IoException(oops.format(num=i, dfile=doc_file,
                                      count=len(row),
                                      expected=len(_TOKEN_FIELDS),
                                      row=row))
    ttype, channel, line, column, text, start, stop = values
    return Token(type=int(ttype), channel=int(channel),
                 line=int(line), column=int(column), text=text,
                 token_index=i, start=int(start), stop=int(stop))


def _read_tree(doc_file, tokens, jtree):
    """
    Build a parse tree from nested JSON: a rule is
    `{"rule": int, "children": [...]}`, a leaf is the stream index
    of its token
    """
    tree = ParseTree()
    if jtree is None:
        return tree
    # explicit stack: children are pushed in reverse so that they
    # get added in source order
    stack = [(jtree, None)]
    while stack:
        jnode, parent = stack.pop()
        if isinstance(jnode, dict):
            if "rule" not in jnode:
                oops = 'Rule node without a "rule" index in {dfile}: {node}'
                raise IoException(oops.format(dfile=doc_file, node=jnode))
            node_id = tree.add_rule(int(jnode["rule"]), parent=parent)
            for child in reversed(jnode.get("children", [])):
                stack.append((child, node_id))
        else:
            if parent is None:
                oops = 'The tree in {dfile} is a bare token'
                raise IoException(oops.format(dfile=doc_file))
            idx = int(jnode)
            if not 0 <= idx < len(tokens):
                oops = ('The tree in {dfile} refers to token {idx} '
                        'but there are only {count} tokens')
                raise IoException(oops.format(dfile=doc_file, idx=idx,
                                              count=len(tokens)))
            tree.add_leaf(tokens[idx], parent)
    return tree


def load_document(doc_file):
    """
    Read a parsed document from a JSON file with the keys

    * `tokens`: the whole token stream, hidden tokens included
    * `tree`: nested rule nodes whose leaves are token indices
    * `name`, `vocabulary`, `rule_names` (optional)

    :rtype: Document
    """
    with codecs.open(doc_file, 'r', 'utf-8') as stream:
        try:
            jdoc = json.load(stream)
        except ValueError as oops:
            raise IoException('{} is not valid JSON: {}'.format(doc_file,
                                                               oops))
    if "tokens" not in jdoc:
        raise IoException('{} has no "tokens" entry'.format(doc_file))
    tokens = [_read_token(doc_file, i, row)
              for i, row in enumerate(jdoc["tokens"])]
    tree = _read_tree(doc_file, tokens, jdoc.get("tree"))
    return Document(name=jdoc.get("name", doc_file),
                    tokens=TokenStream(tokens),
                    tree=tree,
                    vocabulary=jdoc.get("vocabulary"),
                    rule_names=jdoc.get("rule_names"))


# ---------------------------------------------------------------------
# feature tables
# ---------------------------------------------------------------------


def save_features(table, filename, label="newlines"):
    """
    Write the feature vectors of a table in svmlight format,
    with the given layout label as target
    """
    dump_svmlight_file(table.features,
                       table.labels(label),
                       filename,
                       zero_based=True)


def load_features(filename):
    """
    Read back a feature table saved by :py:func:`save_features`

    :rtype: (2D array(int), 1D array(int))
    """
    # pylint: disable=unbalanced-tuple-unpacking
    data, target = load_svmlight_file(filename,
                                      n_features=NUM_FEATURES,
                                      zero_based=True)
    # pylint: enable=unbalanced-tuple-unpacking
    return (np.asarray(data.toarray(), dtype=np.int64),
            np.asarray(target, dtype=np.int64))


def save_vocab(filename):
    """
    Write one line per feature slot, naming it
    """
    with codecs.open(filename, 'w', 'utf-8') as stream:
        for name in feature_names():
            print(name, file=stream)
