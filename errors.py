"""
Errors module.
Exceptions raised while loading rewrite rules or evaluating them.
"""
from typing import Any


class ExternalURIError(Exception):
    """Base class for every rewrite configuration error."""


class UnrecognizedSpecError(ExternalURIError, ValueError):
    """A rewrite specification matched none of the recognized forms."""

    def __init__(self, spec: Any):
        self.spec = spec
        super().__init__(f"Can't recognize translation for {spec!r}")


class MalformedRuleError(ExternalURIError, ValueError):
    """A rule object does not resolve to exactly one (pattern, rewrite) pair."""

    def __init__(self, rule: Any, reason: str = ''):
        self.rule = rule
        message = f"Malformed rewrite rule {rule!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidRulePatternError(MalformedRuleError):
    """The match pattern of a rule is not a valid regular expression."""

    def __init__(self, rule: Any, pattern: str, error: Exception):
        self.pattern = pattern
        super().__init__(rule, f"invalid pattern {pattern!r} ({error})")
