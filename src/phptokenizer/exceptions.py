"""
Exception classes for phptokenizer.
"""


class PhpTokenizerError(Exception):
    """Base exception for all phptokenizer errors."""
    pass


class SourceReadError(PhpTokenizerError):
    """Exception raised when the source file cannot be read."""
    pass


class ParseError(PhpTokenizerError):
    """Exception raised when the PHP parser cannot be created or run."""
    pass


class PositionError(PhpTokenizerError):
    """Exception raised for offsets outside of the source text."""
    pass


class TraversalError(PhpTokenizerError):
    """Exception raised when a node does not have the shape a rule expects."""
    pass


class UnknownTokenError(PhpTokenizerError, KeyError):
    """Exception raised for codes that no token kind is bound to."""
    pass


class ConfigurationError(PhpTokenizerError):
    """Exception raised for configuration errors."""
    pass
