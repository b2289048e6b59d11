"show the feature vectors and labels for parsed documents"

import codecs

from ..args import (add_common_args, add_extraction_args, args_to_config)
from ..report import (label_summary, show_feature_table)
from ..table import FeatureTable
from .util import (collect_args_tables, load_args_documents)

# ---------------------------------------------------------------------
# main
# ---------------------------------------------------------------------


def config_argparser(psr):
    "add subcommand arguments to subparser"

    add_common_args(psr)
    add_extraction_args(psr)
    psr.add_argument("--summary", action="store_true",
                     help="only show how often each label value occurs")
    psr.add_argument("--output", metavar="FILE",
                     help="output to file")
    psr.set_defaults(func=main)


def main(args):
    "subcommand main (invoked from outer script)"
    config = args_to_config(args)
    docs = load_args_documents(args)
    tables = collect_args_tables(args, docs, config)
    blocks = []
    if not args.summary:
        for doc, table in zip(docs, tables):
            blocks.append("# {}".format(doc.name))
            blocks.append(show_feature_table(table,
                                             vocabulary=doc.vocabulary,
                                             rule_names=doc.rule_names))
    blocks.append(label_summary(FeatureTable.vstack(tables)))
    res = "\n\n".join(blocks)
    if args.output is None:
        print(res)
    else:
        with codecs.open(args.output, 'w', 'utf-8') as fout:
            print(res, file=fout)
