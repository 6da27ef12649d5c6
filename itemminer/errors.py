from __future__ import annotations


class AbortError(RuntimeError):
    """Raised when a mining run reaches a state it was not built to handle.

    Unlike the ``ValueError`` raised for bad parameters, this signals a bug in
    how itemsets were constructed (for example a level mixing encodings) and
    the run cannot continue.
    """
