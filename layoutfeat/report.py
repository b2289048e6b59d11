"""
Showing feature vectors and labels to humans
"""

from collections import Counter

from tabulate import tabulate

from .document import rule_display_name, token_display_name
from .features import FEATURES, INDEX_TYPE, FeatureType
from .table import LABELS
from .util import abbreviate_middle, center


def _join_slots(cells):
    """
    Space separated cells, with a bar between the previous
    tokens and the current one
    """
    parts = []
    for i, cell in enumerate(cells):
        if i == INDEX_TYPE:
            parts.append("| " + cell)
        else:
            parts.append(cell)
    return " ".join(parts)


def _show_slot(ftype, value, vocabulary, rule_names):
    "one slot, padded to its display width"
    width = ftype.display_width
    if ftype == FeatureType.token:
        name = token_display_name(vocabulary, value)
        return center(abbreviate_middle(name, "*", width), width).rjust(width)
    elif ftype == FeatureType.rule:
        if value < 0:
            return " " * width
        name = rule_display_name(rule_names, value)
        return abbreviate_middle(name, "*", width).rjust(width)
    elif ftype == FeatureType.info_file:
        return " " * width
    else:
        if value < 0:
            return " " * width
        return str(value).rjust(width)


def feature_vector_to_string(features, vocabulary=None, rule_names=None):
    """
    One line, fixed width rendering of a feature vector; token
    types and rules are shown by name where we have names for them

    :type features: [int]
    :type vocabulary: [string] or None
    :type rule_names: [string] or None
    """
    return _join_slots([_show_slot(meta.type, int(value),
                                   vocabulary, rule_names)
                        for meta, value in zip(FEATURES, features)])


def feature_name_header():
    """
    Column headers to go on top of :py:func:`feature_vector_to_string`
    lines: two rows of abbreviated names and a row of `=`
    """
    rows = []
    for row in range(2):
        rows.append(_join_slots([center(meta.header[row],
                                        meta.type.display_width)
                                 for meta in FEATURES]))
    rows.append(_join_slots(["=" * meta.type.display_width
                             for meta in FEATURES]))
    return "\n".join(rows) + "\n"


def show_feature_table(table, vocabulary=None, rule_names=None):
    """
    Header and one rendered line per row of a feature table,
    followed by its layout labels

    :type table: FeatureTable
    """
    lines = [feature_name_header().rstrip("\n")]
    for i, features in enumerate(table.features):
        labels = " ".join("{}={}".format(name, table.labels(name)[i])
                          for name in LABELS)
        lines.append(feature_vector_to_string(features,
                                              vocabulary=vocabulary,
                                              rule_names=rule_names) +
                     "  " + labels)
    return "\n".join(lines)


def label_summary(table):
    """
    How often each value of each layout label occurs

    :type table: FeatureTable
    :rtype: string
    """
    rows = []
    for name in LABELS:
        counts = Counter(int(x) for x in table.labels(name))
        first = True
        for value, count in sorted(counts.items()):
            rows.append([name if first else "", value, count])
            first = False
    return tabulate(rows, headers=["label", "value", "count"])
