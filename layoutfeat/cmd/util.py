'''
Utility functions for command line tools
'''

import sys

from ..collect import collect_corpus
from ..io import Torpor, load_document


def load_args_documents(args):
    '''
    Load the documents specified via command line arguments
    '''
    with Torpor("Reading documents", quiet=args.quiet):
        return [load_document(f) for f in args.documents]


def collect_args_tables(args, docs, config):
    '''
    Feature tables for the documents, with feedback unless quiet
    '''
    msg = "Extracting features from {} documents".format(len(docs))
    with Torpor(msg, quiet=args.quiet):
        return collect_corpus(docs, config)


def announce_output(path):
    """
    Tell the user where we saved the output
    """
    print("Output written to", path, file=sys.stderr)
