"""
layoutfeat subcommands
"""

# pylint: disable=import-self
from . import\
    (extract,
     inspect)

SUBCOMMANDS = [extract,
               inspect]
