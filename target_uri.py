"""
Target URI module.
Represents a generated URI whose scheme, host, port and path can be rewritten.
"""
from typing import Optional

from yarl import URL


class TargetURI:
    """Mutable URI value that rewrite rules write into, one component at a time."""

    def __init__(self, scheme: str = '', host: Optional[str] = None, port: Optional[int] = None,
                 path: str = '', user: Optional[str] = None, password: Optional[str] = None,
                 query_string: str = '', fragment: str = ''):
        """
        Initialize a target URI.

        Components are stored in their encoded (on the wire) form.

        Args:
            scheme: The URI scheme ('' for a relative reference)
            host: The host, IPv6 literals in brackets
            port: The explicit port, or None for the scheme default
            path: The path, starting with '/' when a host is set
            user: Optional user name
            password: Optional password
            query_string: The query without the leading '?'
            fragment: The fragment without the leading '#'
        """
        self.scheme = scheme
        self.host = host
        self.port = port
        self.path = path
        self.user = user
        self.password = password
        self.query_string = query_string
        self.fragment = fragment

    @classmethod
    def from_string(cls, url: str) -> 'TargetURI':
        """Build a TargetURI from an absolute or relative URL string."""
        parsed = URL(url)
        host = parsed.raw_host
        if host and ':' in host:
            host = f'[{host}]'
        return cls(
            scheme=parsed.scheme,
            host=host,
            port=parsed.explicit_port,
            path=parsed.raw_path,
            user=parsed.raw_user,
            password=parsed.raw_password,
            query_string=parsed.raw_query_string,
            fragment=parsed.raw_fragment,
        )

    def to_url(self) -> URL:
        """Render the components as a yarl URL."""
        return URL.build(
            scheme=self.scheme or '',
            user=self.user,
            password=self.password,
            host=self.host or '',
            port=self.port,
            path=self.path,
            query_string=self.query_string,
            fragment=self.fragment,
            encoded=True,
        )

    def __str__(self):
        return str(self.to_url())

    def __repr__(self):
        return f'TargetURI({str(self)!r})'

    def __eq__(self, other):
        if not isinstance(other, TargetURI):
            return NotImplemented
        return vars(self) == vars(other)
