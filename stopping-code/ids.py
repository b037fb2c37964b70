# ids.py
# October 2026
# python3

"""
Routines for working with case identifiers.

A case id (or "caseid") is a string naming one sampling unit still
pending resolution in data collection, e.g. "1043" or "HH-0217".
Ids are cleaned on input (surrounding whitespace removed) and are
otherwise treated as opaque.

Ties in the greedy selection are broken by "smallest case id".  When
every id in the pool is a decimal integer the comparison is numeric
(so "9" < "10"); otherwise it is lexicographic on the cleaned string.
"""


def clean_id(id):
    """ 
    Return a cleaned version of id: a string with leading and trailing
    whitespace removed.  Non-strings are converted with str() first.
    """

    if id is None:
        return ""
    return str(id).strip()


def is_numeric_id(id):
    """ Return True if id is a (possibly signed) string of decimal digits, as int() accepts. """

    s = clean_id(id)
    if s.startswith(("+", "-")):
        s = s[1:]
    return len(s) > 0 and s.isdecimal()


def caseid_key_function(caseids):
    """
    Return a key function ordering the given caseids from smallest
    to largest, suitable for sorted() and min().

    Numeric comparison is used only if *all* the given ids are numeric,
    so that the order is total and does not depend on which subset of
    the pool happens to be compared.

    >>> key = caseid_key_function(["9", "10", "100"])
    >>> sorted(["100", "9", "10"], key=key)
    ['9', '10', '100']
    >>> key = caseid_key_function(["b", "a10", "a9"])
    >>> sorted(["b", "a10", "a9"], key=key)
    ['a10', 'a9', 'b']
    """

    if all(is_numeric_id(caseid) for caseid in caseids):
        return lambda caseid: (int(clean_id(caseid)), clean_id(caseid))
    return clean_id

