"""
Configuration module for URI rewriting.
Handles environment variable parsing and rule loading.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from errors import MalformedRuleError
from rewrite_rule import RewriteRule, load_rules, parse_bool

logger = logging.getLogger(__name__)

ENV_PREFIX = 'EXTERNAL_URI'


class Config:
    """Manages the rewrite rule configuration from environment variables."""

    def __init__(self, environ: Optional[dict] = None, rules: Optional[Sequence[Any]] = None):
        """
        Initialize the configuration.

        Args:
            environ: Mapping to read variables from (default: os.environ)
            rules: Rule objects to use instead of the environment
        """
        self.environ = os.environ if environ is None else environ
        self.rules_file = self.environ.get(f'{ENV_PREFIX}_RULES_FILE') or None

        if rules is not None:
            self.rules: Tuple[RewriteRule, ...] = load_rules(rules)
        else:
            # File rules first, then numbered environment rules
            loaded: List[RewriteRule] = []
            if self.rules_file:
                loaded.extend(load_rules_from_json(Path(self.rules_file)))
            loaded.extend(self._parse_env_rules())
            self.rules = tuple(loaded)

        logger.info("Loaded %d rewrite rules", len(self.rules))

    @classmethod
    def from_mapping(cls, entries: Sequence[Any]) -> 'Config':
        """Build a configuration from an in-memory list of rule objects."""
        return cls(environ={}, rules=entries)

    def get_rules(self) -> Tuple[RewriteRule, ...]:
        """Get the ordered rule set."""
        return self.rules

    def get_rules_file(self) -> Optional[str]:
        """Get the path of the JSON rules file, if one is configured."""
        return self.rules_file

    def _parse_env_rules(self) -> List[RewriteRule]:
        """
        Parse rewrite rules from environment variables.
        Expected format: EXTERNAL_URI_RULE_<N>_MATCH, EXTERNAL_URI_RULE_<N>_REWRITE, EXTERNAL_URI_RULE_<N>_CONTINUE
        """
        rules = []
        rule_index = 1

        while True:
            match_key = f'{ENV_PREFIX}_RULE_{rule_index}_MATCH'
            rewrite_key = f'{ENV_PREFIX}_RULE_{rule_index}_REWRITE'
            continue_key = f'{ENV_PREFIX}_RULE_{rule_index}_CONTINUE'

            pattern = self.environ.get(match_key)
            if pattern is None:
                break

            rewrite = self.environ.get(rewrite_key)
            if rewrite is None:
                raise MalformedRuleError({match_key: pattern}, f"{rewrite_key} is not set")

            continue_value = self.environ.get(continue_key, 'false')
            continue_evaluation = parse_bool(continue_value, {continue_key: continue_value})
            rules.append(RewriteRule(pattern, rewrite, continue_evaluation))

            rule_index += 1

        # Order is significant, never sort
        return rules


def load_rules_from_json(path: Path) -> Tuple[RewriteRule, ...]:
    """
    Load rule objects from a JSON file holding a list of rules.

    Raises:
        MalformedRuleError: If the document is not a list of valid rules
    """
    data = json.loads(path.read_text())
    rules = load_rules(data)
    logger.info("Loaded %d rewrite rules from %s", len(rules), path)
    return rules
