"""
Rule Engine module.
Evaluates an ordered list of rewrite rules against a generated path and
applies the matching overrides to the URI.
"""
import logging
from typing import Any, List, Sequence

from rewrite_rule import RewriteRule, load_rules
from rewrite_spec import RewriteSpec
from target_uri import TargetURI

logger = logging.getLogger(__name__)


def apply_spec(spec: RewriteSpec, target: TargetURI) -> TargetURI:
    """
    Force the components present in the spec onto the target.

    The path of the spec is a prefix: it is prepended to the current path.
    """
    if spec.scheme is not None:
        target.scheme = spec.scheme
    if spec.host is not None:
        target.host = spec.host
    if spec.port is not None:
        target.port = spec.port
    if spec.path is not None:
        target.path = spec.path + target.path
    return target


def apply_rules(rules: Sequence[RewriteRule], path: str, target: TargetURI) -> TargetURI:
    """
    Apply the rules that match the path to the target, in order.

    Every rule is tested against the original path, never against the
    rewritten URI. Evaluation stops after the first matching rule unless
    that rule asks to continue.

    Args:
        rules: The ordered rule set
        path: The path the URI was generated for
        target: The URI to rewrite (modified in place)

    Returns:
        The target URI

    Raises:
        UnrecognizedSpecError: If a matching rule has an unparseable rewrite
    """
    for rule in rules:
        if not rule.matches(path):
            continue

        spec = rule.spec
        if spec.is_empty():
            logger.debug("Rule %r matched %s, nothing to override", rule.pattern, path)
        else:
            apply_spec(spec, target)
            logger.debug("Rule %r matched %s, applied %s", rule.pattern, path, spec.as_dict())

        if not rule.continue_evaluation:
            break

    return target


class RuleEngine:
    """Holds a rule set and rewrites URIs with it."""

    def __init__(self, rules: Sequence[RewriteRule] = ()):
        """
        Initialize the rule engine.

        Args:
            rules: The ordered rule set (copied into an immutable tuple)
        """
        self.rules = tuple(rules)

    @classmethod
    def from_config(cls, entries: Sequence[Any]) -> 'RuleEngine':
        """Build an engine from raw rule objects (either shorthand or explicit form)."""
        return cls(load_rules(entries))

    def apply(self, path: str, target: TargetURI) -> TargetURI:
        """Rewrite the target in place. See apply_rules."""
        return apply_rules(self.rules, path, target)

    def rewrite(self, path: str, url: str) -> str:
        """
        Rewrite a URL string generated for the given path.

        Raises:
            ValueError: If a matching rule overrides the scheme, host or port
                and the URL is relative
        """
        matched = self.matching_rules(path)
        if not matched:
            return url
        target = TargetURI.from_string(url)
        if target.host is None and any(rule.spec.has_authority() for rule in matched):
            raise ValueError(f"Rewriting {url!r} needs an absolute URL")
        return str(self.apply(path, target))

    def matching_rules(self, path: str) -> List[RewriteRule]:
        """Return the rules that would be applied to the path, in order."""
        matched = []
        for rule in self.rules:
            if rule.matches(path):
                matched.append(rule)
                if not rule.continue_evaluation:
                    break
        return matched

    def matches(self, path: str) -> bool:
        """Return True if at least one rule applies to the path."""
        return any(rule.matches(path) for rule in self.rules)

    def __len__(self):
        return len(self.rules)

    def __repr__(self):
        return f'RuleEngine({list(self.rules)!r})'
