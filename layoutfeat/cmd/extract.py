"write feature vectors and layout labels for parsed documents"

from ..args import (add_common_args, add_extraction_args, args_to_config)
from ..io import (Torpor, save_features, save_vocab)
from ..table import (FeatureTable, LABELS)
from .util import (announce_output, collect_args_tables,
                   load_args_documents)


def config_argparser(psr):
    "add subcommand arguments to subparser"

    add_common_args(psr)
    add_extraction_args(psr)
    psr.add_argument("--output", "-o", metavar="FILE",
                     required=True,
                     help="save features here (svmlight)")
    psr.add_argument("--label", choices=LABELS,
                     default=LABELS[0],
                     help="layout label to use as target "
                     "(default: {})".format(LABELS[0]))
    psr.add_argument("--vocab", metavar="FILE",
                     help="also save feature slot names here")
    psr.set_defaults(func=main)


def main(args):
    "subcommand main (invoked from outer script)"
    config = args_to_config(args)
    docs = load_args_documents(args)
    tables = collect_args_tables(args, docs, config)
    table = FeatureTable.vstack(tables)
    with Torpor("Saving {} feature vectors".format(table.num_rows),
                quiet=args.quiet):
        save_features(table, args.output, label=args.label)
        if args.vocab is not None:
            save_vocab(args.vocab)
    if not args.quiet:
        announce_output(args.output)
