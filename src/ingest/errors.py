from __future__ import annotations


class RetrievalError(Exception):
    """The retrieval engine could not produce a usable response."""


class LookupInProgressError(RuntimeError):
    """A lookup was requested while another one is still pending."""
