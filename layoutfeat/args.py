"""
Managing command line arguments
"""

from .config import (ConfigException, ExtractionConfig, DEFAULT_TAB_SIZE)

# ---------------------------------------------------------------------
# argparse
# ---------------------------------------------------------------------


def add_common_args(psr):
    "add usual layoutfeat args to subcommand parser"

    psr.add_argument("documents", metavar="FILE", nargs="+",
                     help="parsed documents (json)")
    psr.add_argument("--quiet", action="store_true",
                     help="Supress all feedback")


def add_extraction_args(psr):
    "feature extraction settings"

    grp = psr.add_argument_group('extraction')
    grp.add_argument("--tab-size", metavar="INT",
                     type=int, default=DEFAULT_TAB_SIZE,
                     help="columns per indentation level "
                     "(default: {})".format(DEFAULT_TAB_SIZE))
    grp.add_argument("--jobs", "-j", metavar="INT",
                     type=int, default=1,
                     help="number of documents to process in parallel "
                     "(-1 for all cores, default: 1)")
    grp.add_argument("--file-id", metavar="INT",
                     type=int, default=0,
                     help="number for the first document in the "
                     "informational file slot (default: 0)")


def args_to_config(args):
    """
    Extraction config corresponding to command line arguments

    Calls `sys.exit` (through argparse conventions) if the
    settings do not make sense

    :rtype: ExtractionConfig
    """
    config = ExtractionConfig(tab_size=args.tab_size,
                              file_id=args.file_id,
                              n_jobs=args.jobs)
    try:
        return config.sanity_check()
    except ConfigException as oops:
        raise SystemExit("arg error: {}".format(oops))
