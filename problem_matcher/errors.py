"""Exceptions raised while loading or running problem matchers."""


class ProblemMatcherError(Exception):
    """Base class for every error raised by this package."""


class MatcherError(ProblemMatcherError):
    """Raised when a matcher definition is malformed or unusable."""


class MatcherFileError(ProblemMatcherError):
    """Raised when a matcher document cannot be read or fails validation."""
