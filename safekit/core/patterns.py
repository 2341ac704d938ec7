"""Precompiled patterns for schema fields.

OLD_ID matches ids from imported legacy data: 17 characters from an alphabet
that, unlike current ids, includes 0 and 1.

URL is dperini's URL regex (https://gist.github.com/dperini/729294) with the
TLD made optional so that localhost URLs pass.
"""

import re


OLD_ID = re.compile(
    r"^[0123456789ABCDEFGHJKLMNPQRSTWXYZabcdefghijkmnopqrstuvwxyz]{17}\Z"
)

URL = re.compile(
    r"^"
    # protocol identifier
    r"(?:(?:https?|ftp)://)"
    # user:pass authentication
    r"(?:\S+(?::\S*)?@)?"
    r"(?:"
    # private & local networks are excluded
    r"(?!(?:10|127)(?:\.\d{1,3}){3})"
    r"(?!(?:169\.254|192\.168)(?:\.\d{1,3}){2})"
    r"(?!172\.(?:1[6-9]|2\d|3[0-1])(?:\.\d{1,3}){2})"
    # dotted octets, no 0.0.0.0, nothing >= 224.0.0.0,
    # no network or broadcast addresses
    r"(?:[1-9]\d?|1\d\d|2[01]\d|22[0-3])"
    r"(?:\.(?:1?\d{1,2}|2[0-4]\d|25[0-5])){2}"
    r"(?:\.(?:[1-9]\d?|1\d\d|2[0-4]\d|25[0-4]))"
    r"|"
    # host name
    r"(?:(?:[a-z\u00a1-\uffff0-9]-*)*[a-z\u00a1-\uffff0-9]+)"
    # domain name
    r"(?:\.(?:[a-z\u00a1-\uffff0-9]-*)*[a-z\u00a1-\uffff0-9]+)*"
    # TLD, optional
    r"(?:\.(?:[a-z\u00a1-\uffff]{2,}))?"
    r")"
    # port
    r"(?::\d{2,5})?"
    # path
    r"(?:/\S*)?"
    r"\Z",
    re.IGNORECASE,
)
