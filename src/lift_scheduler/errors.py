from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised when a building, car index or request falls outside the model.

    Always raised before any state is mutated.
    """


class EmptyQueueUnderflow(IndexError):
    """Raised when removing from an empty request queue or priority store.

    Call sites guard against this; seeing it means a caller skipped the check.
    """
