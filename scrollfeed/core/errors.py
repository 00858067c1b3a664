"""Exception types raised for programmer and configuration errors."""


class ScrollFeedError(Exception):
    """Base class for ScrollFeed errors"""
    pass


class ConfigurationError(ScrollFeedError):
    """Raised when settings cannot be turned into a working engine"""
    pass


class InvalidSegmentError(ScrollFeedError, ValueError):
    """Raised when a segment index below 1 is requested"""

    def __init__(self, segment: int):
        super().__init__(f"Segment must be >= 1, got {segment}")
        self.segment = segment
