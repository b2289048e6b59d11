"""
A parsed source file
"""

from collections import namedtuple

from .token import EOF, TokenStream

# pylint: disable=too-few-public-methods


class Document(namedtuple("Document",
                          "name tokens tree vocabulary rule_names")):
    """
    One source file, already lexed and parsed

    Parameters
    ----------
    name : string
        some identifier for the file (eg. its path)
    tokens : TokenStream
        every token in the file, hidden ones included
    tree : ParseTree
    vocabulary : [string] or None
        display names for token types, indexed by type
    rule_names : [string] or None
        grammar rule names, indexed by rule index
    """
    @classmethod
    def make(cls, tokens, tree, name=None,
             vocabulary=None, rule_names=None):
        """
        Build a document from any sequence of tokens
        """
        if not isinstance(tokens, TokenStream):
            tokens = TokenStream(tokens)
        return cls(name=name, tokens=tokens, tree=tree,
                   vocabulary=vocabulary, rule_names=rule_names)

    def token_name(self, ttype):
        "display name for a token type"
        return token_display_name(self.vocabulary, ttype)

    def rule_name(self, rule_index):
        "display name for a rule"
        return rule_display_name(self.rule_names, rule_index)


def token_display_name(vocabulary, ttype):
    """
    Display name for a token type (falls back to the number
    if we have no vocabulary for it)
    """
    if ttype == EOF:
        return "EOF"
    if vocabulary is not None and 0 <= ttype < len(vocabulary):
        return vocabulary[ttype]
    return str(ttype)


def rule_display_name(rule_names, rule_index):
    """
    Display name for a rule (falls back to the number
    if we have no name for it)
    """
    if rule_names is not None and 0 <= rule_index < len(rule_names):
        return rule_names[rule_index]
    return str(rule_index)
