"""
layoutfeat subcommand tests
"""

# pylint: disable=too-few-public-methods

import argparse
import codecs
import os
import shutil
import tempfile
import unittest

from ..features import NUM_FEATURES
from ..io import load_features
from ..tests import (CALL_SHAPE, CALL_TEXT, IF_SHAPE, IF_TEXT,
                     mk_doc, write_json_doc)
from . import SUBCOMMANDS, extract, inspect


class SubcommandTest(unittest.TestCase):
    '''
    run the subcommands end to end on small documents
    '''
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.docs = []
        for name, text, shape in [("call", CALL_TEXT, CALL_SHAPE),
                                 ("if", IF_TEXT, IF_SHAPE)]:
            path = os.path.join(self.tmpdir, name + ".json")
            write_json_doc(mk_doc(text, shape), path)
            self.docs.append(path)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _parse(self, module, argv):
        "parse arguments the way the main script would"
        psr = argparse.ArgumentParser()
        module.config_argparser(psr)
        return psr.parse_args(argv)

    def test_subcommands(self):
        'every subcommand can configure a parser'
        names = [m.__name__.split('.')[-1] for m in SUBCOMMANDS]
        self.assertEqual(["extract", "inspect"], names)

    def test_extract(self):
        'features for all documents in one file'
        output = os.path.join(self.tmpdir, "out.svmlight")
        vocab = os.path.join(self.tmpdir, "out.vocab")
        args = self._parse(extract,
                           self.docs + ["--quiet", "--output", output,
                                        "--vocab", vocab,
                                        "--label", "indent"])
        args.func(args)
        data, target = load_features(output)
        self.assertEqual((11, NUM_FEATURES), data.shape)
        self.assertEqual([0, 0, 0, 0, 0, 0, 0, 0, 0, 0, -4], list(target))
        with codecs.open(vocab, 'r', 'utf-8') as stream:
            self.assertEqual(NUM_FEATURES, len(stream.readlines()))

    def test_bad_tab_size(self):
        'nonsensical settings stop the command'
        output = os.path.join(self.tmpdir, "out.svmlight")
        args = self._parse(extract,
                           self.docs + ["--quiet", "--output", output,
                                        "--tab-size", "0"])
        self.assertRaises(SystemExit, args.func, args)

    def test_inspect(self):
        'rendered tables and label summary'
        output = os.path.join(self.tmpdir, "report.txt")
        args = self._parse(inspect,
                           self.docs + ["--quiet", "--output", output])
        args.func(args)
        with codecs.open(output, 'r', 'utf-8') as stream:
            report = stream.read()
        self.assertIn("# test", report)
        self.assertIn("align_depth", report)
        self.assertIn("arguments", report)
