"""
Tokens and token streams, as handed over by the parser
"""

from collections import namedtuple

# pylint: disable=too-few-public-methods

# pylint: disable=pointless-string-statement
EOF = -1
"token type of the distinguished end-of-stream token"

DEFAULT_CHANNEL = 0
"channel of the tokens the parser actually sees"

HIDDEN_CHANNEL = 1
"channel for whitespace and comments"
# pylint: enable=pointless-string-statement


class Token(namedtuple("Token",
                       "type channel line column text token_index "
                       "start stop")):
    """
    A lexical unit

    Parameters
    ----------
    type : int
        token type (vocabulary id)
    channel : int
        `DEFAULT_CHANNEL` or an off-channel id
    line : int
        1-based source line
    column : int
        0-based position of the first character in its line
    text : string
    token_index : int
        position in the token stream
    start, stop : int
        offsets of the first and last characters in the source
        (inclusive)
    """
    _str_template = ("[@{token_index},{start}:{stop}='{text}',"
                     "<{type}>{chan},{line}:{column}]")

    def __str__(self):
        chan = (",channel={}".format(self.channel)
                if self.channel != DEFAULT_CHANNEL else "")
        text = self.text.replace("\n", "\\n").replace("\t", "\\t")
        return self._str_template.format(token_index=self.token_index,
                                         start=self.start,
                                         stop=self.stop,
                                         text=text,
                                         type=self.type,
                                         chan=chan,
                                         line=self.line,
                                         column=self.column)

    def is_on_channel(self):
        "True if the parser sees this token"
        return self.channel == DEFAULT_CHANNEL

    def end_column(self):
        """
        Column just past the last character of the token
        (only meaningful for single-line tokens)
        """
        return self.column + len(self.text)


class TokenStream(object):
    """
    Random access over a list of tokens with a seek position,
    and look-around restricted to on-channel tokens.

    `lt(1)` is the token at the current position, `lt(-1)` the
    nearest on-channel token before it, `lt(2)` the next
    on-channel token after it, and so on. Looking past either
    end of the stream gives None.
    """
    def __init__(self, tokens):
        self._tokens = list(tokens)
        self._pos = 0

    def __len__(self):
        return len(self._tokens)

    def __iter__(self):
        return iter(self._tokens)

    def get(self, i):
        "token at stream index i"
        return self._tokens[i]

    def seek(self, i):
        "move the stream position so that `lt(1)` is `get(i)`"
        self._pos = i

    def index(self):
        "current stream position"
        return self._pos

    def lt(self, k):
        """
        k-th on-channel token relative to the current position
        (k may not be 0)
        """
        if k == 0:
            raise ValueError("lt(0) is undefined")
        if k > 0:
            i = self._pos
            seen = 0
            while i < len(self._tokens):
                if self._tokens[i].is_on_channel():
                    seen += 1
                    if seen == k:
                        return self._tokens[i]
                i += 1
            return None
        i = self._pos - 1
        seen = 0
        while i >= 0:
            if self._tokens[i].is_on_channel():
                seen -= 1
                if seen == k:
                    return self._tokens[i]
            i -= 1
        return None

    def hidden_tokens_to_left(self, i):
        """
        Off-channel tokens between token i and the previous
        on-channel token, in stream order (empty if none)
        """
        hidden = []
        j = i - 1
        while j >= 0 and not self._tokens[j].is_on_channel():
            hidden.append(self._tokens[j])
            j -= 1
        hidden.reverse()
        return hidden


def real_tokens(tokens):
    """
    On-channel tokens of a stream, without the end-of-stream
    token, in stream order

    :rtype: [Token]
    """
    return [t for t in tokens
            if t.type != EOF and t.is_on_channel()]
