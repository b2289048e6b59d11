"""
Feature vectors: what each slot holds

Each token gets a vector of 14 ints. The table of
:py:data:`FEATURES` says what kind of value sits in each slot, how
to show it, and how much a mismatch on it costs when a classifier
compares two vectors.
"""

from collections import namedtuple
import enum

# pylint: disable=too-few-public-methods

INDEX_PREV2_TYPE = 0
INDEX_PREV_TYPE = 1
INDEX_PREV_RULE = 2  # rule the previous token sits in
INDEX_PREV_END_COLUMN = 3
INDEX_PREV_EARLIEST_ANCESTOR = 4
INDEX_PREV_ANCESTOR_WIDTH = 5
INDEX_TYPE = 6
INDEX_RULE = 7  # rule the current token sits in
INDEX_EARLIEST_ANCESTOR = 8
INDEX_ANCESTOR_WIDTH = 9
INDEX_NEXT_TYPE = 10
INDEX_INFO_FILE = 11
INDEX_INFO_LINE = 12
INDEX_INFO_CHARPOS = 13

NUM_FEATURES = 14

# pylint: disable=pointless-string-statement
NO_VALUE = -1
"sentinel for slots with no ancestor or no rule"
# pylint: enable=pointless-string-statement


class FeatureType(enum.Enum):
    """
    What sort of value a feature slot holds
    """
    token = 1
    rule = 2
    int = 3
    info_file = 4
    info_line = 5
    info_charpos = 6

    @property
    def display_width(self):
        "number of characters used to show a value of this type"
        return _DISPLAY_WIDTHS[self]

    def is_info(self):
        "informational slots are carried along but never compared"
        return self in (FeatureType.info_file,
                        FeatureType.info_line,
                        FeatureType.info_charpos)


_DISPLAY_WIDTHS = {FeatureType.token: 12,
                   FeatureType.rule: 14,
                   FeatureType.int: 7,
                   FeatureType.info_file: 15,
                   FeatureType.info_line: 4,
                   FeatureType.info_charpos: 4}


class FeatureMetaData(namedtuple("FeatureMetaData",
                                 "type header mismatch_cost")):
    """
    Description of one slot in the feature vector

    Parameters
    ----------
    type : FeatureType
    header : (string, string)
        the two rows of the abbreviated column header
    mismatch_cost : int
        how much this slot adds to the distance between two vectors
        that disagree on it (0 for slots that are not compared)
    """
    pass


FEATURES = (
    FeatureMetaData(FeatureType.token, ("", "LT(-2)"), 1),
    FeatureMetaData(FeatureType.token, ("", "LT(-1)"), 2),
    FeatureMetaData(FeatureType.rule, ("LT(-1)", "rule"), 2),
    FeatureMetaData(FeatureType.int, ("LT(-1)", "end col"), 0),
    FeatureMetaData(FeatureType.rule, ("LT(-1)", "right ancestor"), 3),
    FeatureMetaData(FeatureType.int, ("ancest.", "width"), 0),
    FeatureMetaData(FeatureType.token, ("", "LT(1)"), 2),
    FeatureMetaData(FeatureType.rule, ("LT(1)", "rule"), 2),
    FeatureMetaData(FeatureType.rule, ("LT(1)", "left ancestor"), 3),
    FeatureMetaData(FeatureType.int, ("ancest.", "width"), 0),
    FeatureMetaData(FeatureType.token, ("", "LT(2)"), 2),
    FeatureMetaData(FeatureType.info_file, ("", "file"), 0),
    FeatureMetaData(FeatureType.info_line, ("", "line"), 0),
    FeatureMetaData(FeatureType.info_charpos, ("char", "pos"), 0),
)

# pylint: disable=pointless-string-statement
MAX_L0_DISTANCE_COUNT = sum(f.mismatch_cost for f in FEATURES)
"largest possible distance between two feature vectors"
# pylint: enable=pointless-string-statement


def current_token_type(features):
    "type of the token the vector was built for"
    return features[INDEX_TYPE]


def info_line(features):
    "source line of the token the vector was built for"
    return features[INDEX_INFO_LINE]


def info_charpos(features):
    "source column of the token the vector was built for"
    return features[INDEX_INFO_CHARPOS]


def feature_names():
    """
    Flat one-string-per-slot names, eg. for writing a vocabulary
    file next to an svmlight table

    :rtype: [string]
    """
    names = []
    for i, feat in enumerate(FEATURES):
        parts = [x for x in feat.header if x]
        names.append("{}:{}".format(i, " ".join(parts).replace(" ", "_")))
    return names
