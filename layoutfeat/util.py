'''
General-purpose functions
'''

import itertools


def concat_i(iters):
    """
    Merge an iterable of iterables into a single iterable
    """
    return itertools.chain.from_iterable(iters)


def concat_l(iters):
    """
    Merge an iterable of iterables into a list
    """
    return list(concat_i(iters))


def abbreviate_middle(text, middle, width):
    """
    Shorten a string to `width` characters (if it is any longer)
    by replacing characters in its middle with `middle`

    Strings that already fit, or widths too small to keep anything
    on either side of the marker, are returned unchanged
    """
    if not text or not middle or len(text) <= width or \
            width < len(middle) + 2:
        return text
    keep = width - len(middle)
    head = keep // 2 + keep % 2
    tail = len(text) - keep // 2
    return text[:head] + middle + text[tail:]


def center(text, width, fill=" "):
    """
    Pad a string on both sides up to `width` characters, with any
    odd extra padding on the right
    """
    if len(text) >= width:
        return text
    pad = width - len(text)
    left = pad // 2
    return fill * left + text + fill * (pad - left)
