"""
Error taxonomy for the logo review core.
Every failure is bounded to the operation that produced it.
"""


class LogoReviewError(Exception):
    """Base class for errors raised by the review core."""


class SearchFailure(LogoReviewError):
    """
    Neighbor search or image metadata lookup failed, or the two
    could not be joined (a returned logo id has no metadata).
    """


class SubmitFailure(LogoReviewError):
    """The annotation batch could not be dispatched."""
