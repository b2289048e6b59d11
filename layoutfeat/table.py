"""
Feature vectors and layout labels for whole documents
"""

from collections import namedtuple

import numpy as np

from .features import NUM_FEATURES
from .util import concat_l

# pylint: disable=too-few-public-methods

LABELS = ["newlines", "whitespace", "indent", "align_depth"]
"names of the layout label columns, in order"


class FeatureTableException(Exception):
    "An exception which arises when working with a feature table"

    def __init__(self, msg):
        super(FeatureTableException, self).__init__(msg)


class FeatureTable(namedtuple("FeatureTable",
                              ["tokens",
                               "features",
                               "newlines",
                               "whitespace",
                               "indent",
                               "align_depth"])):
    '''
    The observations for a set of tokens: one row of features and
    one value for each layout label per token.

    A table usually covers one document, but tables from several
    documents can be stacked together.

    Parameters
    ----------
    tokens ([Token])
        the token each row was built for
    features 2D array(int)
        one feature vector per row
    newlines 1D array(int)
        number of newlines injected before each token
    whitespace 1D array(int)
        number of spaces injected before each token (0 when
        newlines are injected)
    indent 1D array(int)
        column of each token that starts a line relative to the
        previous token that started a line (0 elsewhere)
    align_depth 1D array(int)
        steps from each token up to the rule it lines up with
        (0 if it does not line up with anything)
    '''
    @property
    def num_rows(self):
        "number of tokens (rows) in the table"
        return len(self.tokens)

    @classmethod
    def load(cls, tokens, features, newlines, whitespace, indent,
             align_depth):
        '''
        Build a table from plain lists and run some sanity checks
        (see :py:meth:`sanity_check`)

        :rtype: :py:class:`FeatureTable`
        '''
        if len(features):
            data = np.array(features, dtype=np.int64)
        else:
            data = np.zeros((0, NUM_FEATURES), dtype=np.int64)
        table = cls(tokens=list(tokens),
                    features=data,
                    newlines=np.array(newlines, dtype=np.int64),
                    whitespace=np.array(whitespace, dtype=np.int64),
                    indent=np.array(indent, dtype=np.int64),
                    align_depth=np.array(align_depth, dtype=np.int64))
        table.sanity_check()
        return table

    @classmethod
    def vstack(cls, tables):
        '''
        Combine several tables into one.

        :type tables: [FeatureTable]
        '''
        tables = list(tables)
        if not tables:
            raise ValueError('need non-empty list of feature tables')
        return cls(tokens=concat_l(t.tokens for t in tables),
                   features=np.vstack([t.features for t in tables]),
                   newlines=np.concatenate([t.newlines for t in tables]),
                   whitespace=np.concatenate([t.whitespace
                                              for t in tables]),
                   indent=np.concatenate([t.indent for t in tables]),
                   align_depth=np.concatenate([t.align_depth
                                               for t in tables]))

    def sanity_check(self):
        '''
        Raise :py:class:`FeatureTableException` if anything about
        this table seems wrong, for example if the number of rows
        in one column is not the same as in another
        '''
        num_rows = len(self.tokens)
        if self.features.ndim != 2 or \
                self.features.shape[1] != NUM_FEATURES:
            oops = ('Feature rows should have {expected} slots, '
                    'but the table has shape {shape}')
            raise FeatureTableException(oops.format(expected=NUM_FEATURES,
                                                    shape=self.features.shape))
        if self.features.shape[0] != num_rows:
            oops = ('The number of tokens ({tokens}) does not match '
                    'the number of feature vectors ({rows})')
            num_vectors = self.features.shape[0]
            raise FeatureTableException(oops.format(tokens=num_rows,
                                                    rows=num_vectors))
        for name in LABELS:
            num_labels = len(self.labels(name))
            if num_labels != num_rows:
                oops = ('The number of {name} labels ({labels}) does not '
                        'match the number of feature vectors ({rows})')
                raise FeatureTableException(oops.format(name=name,
                                                        labels=num_labels,
                                                        rows=num_rows))

    def labels(self, name):
        '''
        Column for one of the layout labels (see `LABELS`)
        '''
        if name not in LABELS:
            oops = 'Unknown layout label {name} (choose from {choices})'
            raise FeatureTableException(oops.format(name=name,
                                                    choices=', '.join(LABELS)))
        return getattr(self, name)

    def selected(self, indices):
        '''
        Return only the items in the specified rows
        '''
        indices = np.asarray(indices, dtype=np.intp)
        return FeatureTable(tokens=[self.tokens[i] for i in indices],
                            features=self.features[indices],
                            newlines=np.take(self.newlines, indices),
                            whitespace=np.take(self.whitespace, indices),
                            indent=np.take(self.indent, indices),
                            align_depth=np.take(self.align_depth, indices))

    def line_starts(self):
        '''
        Only the rows for tokens that begin a line
        '''
        return self.selected(np.nonzero(self.newlines > 0)[0])
