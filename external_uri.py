"""
External URI module.
Flask extension that rewrites the URLs generated by url_for so they can point
to other domains (CDNs, asset hosts, versioned prefixes).
"""
import functools
import logging
from typing import Any, Optional, Sequence

from flask import Flask, current_app, has_app_context
from yarl import URL

from config import Config
from rewrite_rule import RewriteRule
from rule_engine import RuleEngine
from target_uri import TargetURI

logger = logging.getLogger(__name__)

EXTENSION_NAME = 'externaluri'
CONFIG_KEY = 'EXTERNALURI'


class ExternalURI:
    """
    Rewrite URLs generated with url_for.

    Rules come from, in order of precedence: the rules passed to the
    constructor, app.config['EXTERNALURI'], or the EXTERNAL_URI_* environment
    variables::

        app.config['EXTERNALURI'] = [
            {'^/static/css/': 'http://css.example.com/'},
            {'match': '^/static', 'rewrite': '/v1', 'continue': True},
        ]
        ExternalURI(app)

    Patterns are matched against the percent-decoded path of the generated
    URL, so an encoded "%2F" matches as "/" and "%20" as a space.
    """

    def __init__(self, app: Optional[Flask] = None, rules: Optional[Sequence[Any]] = None):
        self._rules = rules
        self.engine: Optional[RuleEngine] = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Load the rules for the app and wrap its url_for."""
        engine = RuleEngine(self._load_rules(app))
        self.engine = engine
        app.extensions[EXTENSION_NAME] = engine

        original = app.url_for

        @functools.wraps(original)
        def url_for(endpoint: str, **values: Any) -> str:
            url = original(endpoint, **values)
            path = URL(url).path
            matched = engine.matching_rules(path)
            if not matched:
                return url
            # Scheme, host and port overrides need an absolute URL to write into
            needs_authority = any(rule.spec.has_authority() for rule in matched)
            if needs_authority and not URL(url).is_absolute():
                values['_external'] = True
                url = original(endpoint, **values)
            return str(engine.apply(path, TargetURI.from_string(url)))

        app.url_for = url_for
        app.jinja_env.globals['url_for'] = url_for
        logger.info("URL rewriting enabled with %d rules", len(engine))

    def rewrite(self, path: str, url: str) -> str:
        """Rewrite a URL that was generated for the given path elsewhere."""
        return self._get_engine().rewrite(path, url)

    def _get_engine(self) -> RuleEngine:
        if has_app_context() and EXTENSION_NAME in current_app.extensions:
            return current_app.extensions[EXTENSION_NAME]
        if self.engine is None:
            raise RuntimeError("ExternalURI is not initialized, call init_app first")
        return self.engine

    def _load_rules(self, app: Flask) -> Sequence[RewriteRule]:
        if self._rules is not None:
            return Config.from_mapping(self._rules).get_rules()
        entries = app.config.get(CONFIG_KEY)
        if entries is not None:
            return Config.from_mapping(entries).get_rules()
        return Config().get_rules()
