"""
Rewrite Rule module.
Represents a mapping from a path pattern to a rewrite specification.
"""
import re
from typing import Any, Mapping, Optional, Pattern, Sequence, Tuple

from errors import InvalidRulePatternError, MalformedRuleError
from rewrite_spec import RewriteSpec, parse_rewrite_spec


EXPLICIT_KEYS = ('match', 'rewrite')
CONTINUE_KEY = 'continue'

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


class RewriteRule:
    """Represents a rewrite rule with a match pattern, rewrite spec, and continue flag."""

    def __init__(self, pattern: str, rewrite: str, continue_evaluation: bool = False):
        """
        Initialize a rewrite rule.

        Args:
            pattern: Regular expression searched (unanchored) in the generated path
            rewrite: The rewrite specification to apply when the pattern matches
            continue_evaluation: Keep evaluating later rules after this one matches
        """
        self.pattern = pattern
        self.rewrite = rewrite
        self.continue_evaluation = continue_evaluation
        try:
            self.compiled: Pattern[str] = re.compile(pattern)
        except re.error as e:
            raise InvalidRulePatternError(self._as_entry(), pattern, e)
        # Parsed on first match so that rules that never fire cost nothing
        self._spec: Optional[RewriteSpec] = None

    @property
    def spec(self) -> RewriteSpec:
        """
        The parsed rewrite specification.

        Raises:
            UnrecognizedSpecError: If the rewrite string cannot be parsed
        """
        if self._spec is None:
            self._spec = parse_rewrite_spec(self.rewrite)
        return self._spec

    def matches(self, path: str) -> bool:
        """Return True if the pattern is found anywhere in the path."""
        return self.compiled.search(path) is not None

    @classmethod
    def from_config(cls, entry: Any) -> 'RewriteRule':
        """
        Normalize a configured rule object.

        Accepted shapes:
            {'<pattern>': '<rewrite>'}
            {'<pattern>': '<rewrite>', 'continue': True}
            {'match': '<pattern>', 'rewrite': '<rewrite>', 'continue': True}

        Args:
            entry: The rule object as read from configuration

        Returns:
            The normalized RewriteRule

        Raises:
            MalformedRuleError: If the entry does not resolve to one (pattern, rewrite) pair
        """
        if not isinstance(entry, Mapping):
            raise MalformedRuleError(entry, 'expected a mapping')

        continue_evaluation = parse_bool(entry.get(CONTINUE_KEY, False), entry)

        if any(key in entry for key in EXPLICIT_KEYS):
            missing = [key for key in EXPLICIT_KEYS if key not in entry]
            if missing:
                raise MalformedRuleError(entry, f"missing '{missing[0]}'")
            extra = set(entry) - set(EXPLICIT_KEYS) - {CONTINUE_KEY}
            if extra:
                raise MalformedRuleError(entry, f"unexpected keys {sorted(extra, key=str)}")
            pattern, rewrite = entry['match'], entry['rewrite']
        else:
            pairs = [(key, value) for key, value in entry.items() if key != CONTINUE_KEY]
            if len(pairs) != 1:
                raise MalformedRuleError(entry, f"expected exactly one pattern, found {len(pairs)}")
            pattern, rewrite = pairs[0]

        if not isinstance(pattern, str) or not isinstance(rewrite, str):
            raise MalformedRuleError(entry, 'pattern and rewrite must be strings')

        return cls(pattern, rewrite, continue_evaluation)

    def _as_entry(self) -> dict:
        return {'match': self.pattern, 'rewrite': self.rewrite, 'continue': self.continue_evaluation}

    def __eq__(self, other):
        if not isinstance(other, RewriteRule):
            return NotImplemented
        return self._as_entry() == other._as_entry()

    def __hash__(self):
        return hash((self.pattern, self.rewrite, self.continue_evaluation))

    def __repr__(self):
        continue_str = ', continue' if self.continue_evaluation else ''
        return f'RewriteRule({self.pattern!r} -> {self.rewrite!r}{continue_str})'


def parse_bool(value: Any, entry: Any = None) -> bool:
    """
    Interpret a configured flag (bool, int or string).

    Raises:
        MalformedRuleError: If a string value is not a recognized boolean
    """
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
        raise MalformedRuleError(entry if entry is not None else value, f"invalid continue flag {value!r}")
    return bool(value)


def load_rules(entries: Sequence[Any]) -> Tuple[RewriteRule, ...]:
    """
    Normalize a list of configured rule objects, preserving their order.

    Raises:
        MalformedRuleError: If the entries are not a list or any entry is malformed
    """
    if not isinstance(entries, (list, tuple)):
        raise MalformedRuleError(entries, 'rules must be a list of rule objects')
    return tuple(
        entry if isinstance(entry, RewriteRule) else RewriteRule.from_config(entry)
        for entry in entries
    )
