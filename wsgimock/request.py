# (c) 2005 Ian Bicking and contributors
# This module is part of the Python Paste Project and is released under
# the MIT License: http://www.opensource.org/licenses/mit-license.php
"""
This module provides helper routines with work directly on a WSGI
environment to solve common requirements.

   * get_cookie_dict(environ)
   * parse_querystring(environ)
   * parse_dict_querystring(environ)
   * parse_formvars(environ)
   * construct_url(environ, with_query_string=True, with_path_info=True,
                   script_name=None, path_info=None, querystring=None)

plus the ``Request`` object wrapping all of them.
"""
from http.cookies import SimpleCookie
from urllib.parse import parse_qsl

from wsgimock.util.multidict import MultiDict

__all__ = ['get_cookie_dict', 'parse_querystring', 'parse_dict_querystring',
           'parse_formvars', 'construct_url', 'EnvironHeaders', 'Request']

FORM_CONTENT_TYPES = ('', 'application/x-www-form-urlencoded')

class environ_getter(object):
    """For delegating an attribute to a key in self.environ."""

    def __init__(self, key, default='', default_factory=None):
        self.key = key
        self.default = default
        self.default_factory = default_factory

    def __get__(self, obj, type=None):
        if obj is None:
            return self
        if self.key not in obj.environ:
            if self.default_factory:
                val = obj.environ[self.key] = self.default_factory()
                return val
            else:
                return self.default
        return obj.environ[self.key]

    def __repr__(self):
        return '<Proxy for WSGI environ %r key>' % self.key

def get_cookie_dict(environ):
    """Return a *plain* dictionary of cookies as found in the request.

    Caches the result in the environment, and checks the cache against
    the ``Cookie`` header.
    """
    header = environ.get('HTTP_COOKIE')
    if not header:
        return {}
    if 'wsgimock.cookies.dict' in environ:
        cookies, check_header = environ['wsgimock.cookies.dict']
        if check_header == header:
            return cookies
    cookies = SimpleCookie()
    cookies.load(header)
    result = {}
    for name in cookies:
        result[name] = cookies[name].value
    environ['wsgimock.cookies.dict'] = (result, header)
    return result

def parse_querystring(environ):
    """
    Parses a query string into a list like ``[(name, value)]``.
    Caches this value in case parse_querystring is called again
    for the same request.

    You can pass the result to ``dict()``, but be aware that keys that
    appear multiple times will be lost (only the last value will be
    preserved).
    """
    source = environ.get('QUERY_STRING', '')
    if not source:
        return []
    if 'wsgimock.parsed_querystring' in environ:
        parsed, check_source = environ['wsgimock.parsed_querystring']
        if check_source == source:
            return parsed
    parsed = parse_qsl(source, keep_blank_values=True)
    environ['wsgimock.parsed_querystring'] = (parsed, source)
    return parsed

def parse_dict_querystring(environ):
    """Parses a query string like parse_querystring, but returns a MultiDict

    Example::

        #environ['QUERY_STRING'] -  day=Monday&user=fred&user=jane
        >>> parsed = parse_dict_querystring(environ)

        >>> parsed['day']
        'Monday'
        >>> parsed['user']
        'fred'
        >>> parsed.getall('user')
        ['fred', 'jane']
    """
    return MultiDict(parse_querystring(environ))

def parse_formvars(environ):
    """Parses a url-encoded request body into a MultiDict.

    Only ``application/x-www-form-urlencoded`` bodies (or bodies with
    no content type at all) of non-GET/HEAD requests are parsed;
    anything else gives an empty MultiDict.  Reading consumes
    ``wsgi.input``, so the result is cached in the environment.
    """
    if 'wsgimock.parsed_formvars' in environ:
        return environ['wsgimock.parsed_formvars']
    formvars = MultiDict()
    content_type = environ.get('CONTENT_TYPE', '').split(';', 1)[0]
    if (environ['REQUEST_METHOD'] not in ('GET', 'HEAD')
        and content_type.strip().lower() in FORM_CONTENT_TYPES):
        length = environ.get('CONTENT_LENGTH')
        if length:
            body = environ['wsgi.input'].read(int(length))
        else:
            body = environ['wsgi.input'].read()
        formvars.update(parse_qsl(body.decode('utf-8'),
                                  keep_blank_values=True))
    environ['wsgimock.parsed_formvars'] = formvars
    return formvars

def construct_url(environ, with_query_string=True, with_path_info=True,
                  script_name=None, path_info=None, querystring=None):
    """Reconstructs the URL from the WSGI environment.

    You may override SCRIPT_NAME, PATH_INFO, and QUERYSTRING with
    the keyword arguments.
    """
    url = environ['wsgi.url_scheme']+'://'

    if environ.get('HTTP_HOST'):
        url += environ['HTTP_HOST'].split(':')[0]
    else:
        url += environ['SERVER_NAME']

    if environ['wsgi.url_scheme'] == 'https':
        if environ['SERVER_PORT'] != '443':
            url += ':' + environ['SERVER_PORT']
    else:
        if environ['SERVER_PORT'] != '80':
            url += ':' + environ['SERVER_PORT']

    if script_name is None:
        url += environ.get('SCRIPT_NAME','')
    else:
        url += script_name
    if with_path_info:
        if path_info is None:
            url += environ.get('PATH_INFO','')
        else:
            url += path_info
    if with_query_string:
        if querystring is None:
            if environ.get('QUERY_STRING'):
                url += '?' + environ['QUERY_STRING']
        elif querystring:
            url += '?' + querystring
    return url

_parse_headers_special = {
    'CONTENT_LENGTH': 'Content-Length',
    'CONTENT_TYPE': 'Content-Type',
    }

class EnvironHeaders(object):
    """An object that represents the headers as present in a
    WSGI environment.

    This object is a wrapper (with no internal state) for a WSGI
    request object, representing the CGI-style HTTP_* keys as a
    dictionary.  Because a CGI environment can only hold one value for
    each key, this dictionary is single-valued (unlike outgoing
    headers).
    """

    def __init__(self, environ):
        self.environ = environ

    def _key(self, item):
        item = item.replace('-', '_').upper()
        if item in _parse_headers_special:
            return item
        return 'HTTP_' + item

    def __getitem__(self, item):
        return self.environ[self._key(item)]

    def get(self, item, default=None):
        return self.environ.get(self._key(item), default)

    def __setitem__(self, item, value):
        self.environ[self._key(item)] = value

    def __delitem__(self, item):
        del self.environ[self._key(item)]

    def __iter__(self):
        for key in self.environ:
            if key in _parse_headers_special:
                yield _parse_headers_special[key]
            elif key.startswith('HTTP_'):
                yield key[5:].replace('_', '-').title()

    def keys(self):
        return list(self)

    def __contains__(self, item):
        return self._key(item) in self.environ

class Request(object):
    """WSGI Request API Object

    This object represents a WSGI request with a more friendly interface.
    This does not expose every detail of the WSGI environment, and does not
    in any way express anything beyond what is available in the environment
    dictionary.  *All* state is kept in the environment dictionary.
    """

    def __init__(self, environ):
        self.environ = environ
        # This isn't "state" really, since the object is derivative:
        self.headers = EnvironHeaders(environ)

    body = environ_getter('wsgi.input')
    scheme = environ_getter('wsgi.url_scheme')
    method = environ_getter('REQUEST_METHOD')
    script_name = environ_getter('SCRIPT_NAME')
    path_info = environ_getter('PATH_INFO')
    query_string = environ_getter('QUERY_STRING')
    content_type = environ_getter('CONTENT_TYPE')

    def host(self):
        """Host name provided in HTTP_HOST, with fall-back to SERVER_NAME"""
        return self.environ.get('HTTP_HOST', self.environ.get('SERVER_NAME'))
    host = property(host, doc=host.__doc__)

    def port(self):
        """SERVER_PORT as an integer"""
        return int(self.environ['SERVER_PORT'])
    port = property(port, doc=port.__doc__)

    def path(self):
        return self.script_name + self.path_info
    path = property(path)

    def url(self):
        """The full URL, reconstructed with ``construct_url``"""
        return construct_url(self.environ)
    url = property(url, doc=url.__doc__)

    def content_length(self):
        """CONTENT_LENGTH as an integer, or None if not given"""
        value = self.environ.get('CONTENT_LENGTH')
        if not value:
            return None
        return int(value)
    content_length = property(content_length, doc=content_length.__doc__)

    def is_xhr(self):
        """Returns a boolean if X-Requested-With is present and a XMLHttpRequest"""
        return self.environ.get('HTTP_X_REQUESTED_WITH', '') == 'XMLHttpRequest'
    is_xhr = property(is_xhr, doc=is_xhr.__doc__)

    def GET(self):
        """
        Dictionary-like object representing the QUERY_STRING
        parameters. Always present, if possibly empty.

        If the same key is present in the query string multiple
        times, use ``.getall(key)`` to get every value.
        """
        return parse_dict_querystring(self.environ)
    GET = property(GET, doc=GET.__doc__)

    def POST(self):
        """Dictionary-like object representing a url-encoded POST body.

        This will consume wsgi.input when first accessed if applicable.
        """
        return parse_formvars(self.environ)
    POST = property(POST, doc=POST.__doc__)

    def params(self):
        """MultiDict of keys from POST then GET"""
        pms = MultiDict()
        pms.update(self.POST)
        pms.update(self.GET)
        return pms
    params = property(params, doc=params.__doc__)

    def cookies(self):
        """Dictionary of cookies keyed by cookie name.

        Just a plain dictionary, may be empty but not None.
        """
        return get_cookie_dict(self.environ)
    cookies = property(cookies, doc=cookies.__doc__)
