# gate.py
# Pre-analysis content gate. Runs BEFORE any metric is computed.
# Blank input is the only rejection: every metric is total over non-empty text.

from __future__ import annotations

import logging

log = logging.getLogger("geo.gate")

EMPTY_MESSAGE = "Please enter content to analyze"

# Characters JavaScript treats as whitespace (\s, String.prototype.trim).
# Includes U+FEFF; excludes \x1c-\x1f and \x85, which str.strip() removes.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class ContentError(ValueError):
    """Input text cannot be analyzed. `reason` is a stable machine code."""

    def __init__(self, reason: str = "EMPTY", msg: str = EMPTY_MESSAGE) -> None:
        super().__init__(msg)
        self.reason = reason
        self.msg = msg

    def to_dict(self) -> dict:
        return {"error": self.msg, "reason": self.reason}


def check_content(text) -> str:
    """
    Returns the text unchanged when it is scorable.
    Raises ContentError("EMPTY") for None, empty, or whitespace-only input.
    """
    if text is not None and not isinstance(text, str):
        log.info("content rejected reason=NOT_TEXT")
        raise ContentError("NOT_TEXT", "Content must be a string")
    if not text or not text.strip(WHITESPACE):
        log.info("content rejected reason=EMPTY")
        raise ContentError("EMPTY")
    return text
