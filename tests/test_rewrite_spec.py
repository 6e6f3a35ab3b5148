"""
Test rewrite specification parsing.

Tests cover:
- Absolute URI form (scheme, host, port, path, query)
- Bare scheme form
- Host[:port] form
- Absolute path form
- Unrecognized specifications
"""
import pytest
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from errors import UnrecognizedSpecError
from rewrite_spec import RewriteSpec, parse_rewrite_spec


class TestAbsoluteURIForm:
    """Test specs of the form [scheme]://host[:port][/path][?query]."""

    def test_scheme_and_host(self):
        spec = parse_rewrite_spec('http://cdn.example.com')

        assert spec == RewriteSpec(scheme='http', host='cdn.example.com')
        assert spec.as_dict() == {'scheme': 'http', 'host': 'cdn.example.com'}

    def test_scheme_host_and_path(self):
        spec = parse_rewrite_spec('http://bucket.example.com/v1')

        assert spec == RewriteSpec(scheme='http', host='bucket.example.com', path='/v1')

    def test_all_components_query_discarded(self):
        spec = parse_rewrite_spec('https://cdn.example.com:8443/assets/v2?cache=no')

        assert spec == RewriteSpec(scheme='https', host='cdn.example.com', port=8443, path='/assets/v2')

    def test_trailing_slash_is_stripped(self):
        spec = parse_rewrite_spec('http://css.example.com/v1/')

        assert spec.path == '/v1'

    def test_repeated_trailing_slashes_are_stripped(self):
        spec = parse_rewrite_spec('http://h.example.com/v1//')

        assert spec.path == '/v1'

    def test_root_path_gives_no_path_override(self):
        spec = parse_rewrite_spec('http://css.example.com/')

        assert spec == RewriteSpec(scheme='http', host='css.example.com')
        assert spec.path is None

    def test_empty_scheme_is_not_kept(self):
        spec = parse_rewrite_spec('://static.example.com:8080')

        assert spec == RewriteSpec(host='static.example.com', port=8080)

    def test_ipv4_host(self):
        spec = parse_rewrite_spec('http://10.0.0.1:81')

        assert spec == RewriteSpec(scheme='http', host='10.0.0.1', port=81)

    def test_ipv6_literal_host(self):
        spec = parse_rewrite_spec('https://[::1]:8443')

        assert spec.scheme == 'https'
        assert spec.host == '[::1]'
        assert spec.port == 8443

    def test_percent_encoded_path(self):
        spec = parse_rewrite_spec('http://cdn.example.com/my%20bucket/')

        assert spec.path == '/my%20bucket'


class TestBareSchemeForm:
    """Test the scheme-only specs."""

    def test_https_only(self):
        spec = parse_rewrite_spec('https://')

        assert spec == RewriteSpec(scheme='https')
        assert spec.as_dict() == {'scheme': 'https'}

    def test_http_only(self):
        assert parse_rewrite_spec('http://') == RewriteSpec(scheme='http')


class TestHostPortForm:
    """Test host and host:port specs."""

    def test_host_and_port(self):
        spec = parse_rewrite_spec('cdn.example.com:8080')

        assert spec == RewriteSpec(host='cdn.example.com', port=8080)

    def test_host_only(self):
        spec = parse_rewrite_spec('mydomain.com')

        assert spec == RewriteSpec(host='mydomain.com')
        assert not spec.is_empty()


class TestAbsolutePathForm:
    """Test path prefix specs."""

    def test_path(self):
        assert parse_rewrite_spec('/v3') == RewriteSpec(path='/v3')

    def test_path_trailing_slash_stripped(self):
        assert parse_rewrite_spec('/v3/') == RewriteSpec(path='/v3')

    def test_path_repeated_trailing_slashes_stripped(self):
        spec = parse_rewrite_spec('/v3//')

        assert spec == RewriteSpec(path='/v3')
        assert not spec.path.endswith('/')

    def test_nested_path(self):
        assert parse_rewrite_spec('/assets/v3') == RewriteSpec(path='/assets/v3')

    def test_root_path_is_empty(self):
        spec = parse_rewrite_spec('/')

        assert spec.is_empty()
        assert not spec.has_authority()


class TestUnrecognizedSpecs:
    """Test that specs matching no form fail loudly."""

    @pytest.mark.parametrize('raw', [
        'not a valid spec !!!',
        'ftp://files.example.com',
        'http://user@cdn.example.com',
        'http://cdn.example.com#top',
        '/v3?x=1',
        '',
    ])
    def test_unrecognized(self, raw):
        with pytest.raises(UnrecognizedSpecError) as excinfo:
            parse_rewrite_spec(raw)

        assert excinfo.value.spec == raw

    def test_non_string_spec(self):
        with pytest.raises(UnrecognizedSpecError):
            parse_rewrite_spec(None)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError, match="Can't recognize translation"):
            parse_rewrite_spec('not a valid spec !!!')
