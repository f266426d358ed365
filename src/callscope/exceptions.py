"""Custom exceptions for callscope."""


class CallScopeError(Exception):
    """Base exception for all callscope errors."""


class ConfigError(CallScopeError):
    """Configuration-related errors."""


class GraphError(CallScopeError):
    """Malformed or unreadable graph documents."""
