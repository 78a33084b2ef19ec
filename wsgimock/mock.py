# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Mock requests and responses, for calling a WSGI application in-process.

Use like::

    req = MockRequest(app)
    res = req.get('https://example.org/search?q=wsgi', lint=True)
    assert res.ok
    assert res.content_type == 'text/html'

``env_for`` builds the environment for a request from a URL and some
options.  Parts missing from the URL get defaults: scheme ``http``,
host ``example.org``, the standard port of the scheme, path ``/`` and
an empty query string.
"""

import re
import sys
import time
from io import BytesIO, StringIO
from urllib.parse import urlencode, urlsplit

from wsgimock import wsgilib
from wsgimock.lint import Lint
from wsgimock.response import HeaderDict, ResponseHelpers, status_line
from wsgimock.translogger import TransLogger
from wsgimock.util import NO_DEFAULT

__all__ = ['DEFAULT_ENV', 'FatalWarning', 'FatalWarner', 'MockRequest',
           'MockResponse', 'env_for']

DEFAULT_ENV = {
    'wsgi.version': (1, 0),
    'wsgi.multithread': False,
    'wsgi.multiprocess': True,
    'wsgi.run_once': False,
    'SCRIPT_NAME': '',
    'SERVER_PROTOCOL': 'HTTP/1.0',
    }

DEFAULT_HOST = 'example.org'
DEFAULT_PORTS = {'http': '80', 'https': '443'}

# Methods that carry ``params`` in the query string instead of the body
QUERY_METHODS = ('GET', 'HEAD')

class FatalWarning(RuntimeError):
    """
    Raised when something is written to a fatal ``wsgi.errors``
    stream.
    """

class FatalWarner(object):

    """
    A ``wsgi.errors`` stream that raises ``FatalWarning`` on any
    write, so that logged application errors fail the request.
    """

    def write(self, warning):
        raise FatalWarning(warning)

    def writelines(self, seq):
        for line in seq:
            self.write(line)

    def flush(self):
        pass

    def getvalue(self):
        return ''

def _input_stream(data):
    if data is None:
        data = b''
    elif hasattr(data, 'read'):
        data = data.read()
    if isinstance(data, str):
        data = data.encode('utf-8')
    return BytesIO(data)

def _split_url(url):
    parts = urlsplit(url)
    scheme = parts.scheme or 'http'
    try:
        port = parts.port
    except ValueError:
        port = None
    if port is None:
        port = DEFAULT_PORTS.get(scheme, '80')
    return (scheme, parts.hostname or DEFAULT_HOST, str(port),
            parts.path or '/', parts.query)

def env_for(url='', method='GET', input=None, params=None, headers=None,
            script_name='', fatal=False, extra_environ=None):
    """
    Builds a WSGI environment for a request to ``url``.

    ``input``:
        The request body: ``str`` (encoded as UTF-8), ``bytes`` or a
        file-like object, which is read completely.

    ``params``:
        A mapping or list of pairs.  For GET and HEAD requests, or when
        ``input`` is given, they are added to the query string;
        otherwise they are sent url-encoded as the body.

    ``headers``:
        Request headers, set as ``HTTP_*`` keys.

    ``fatal``:
        If true, anything written to ``wsgi.errors`` raises
        ``FatalWarning``.

    ``extra_environ``:
        Keys that are put in the environment last.
    """
    scheme, host, port, path, query = _split_url(url)
    method = method.upper()
    environ = DEFAULT_ENV.copy()
    environ.update({
        'REQUEST_METHOD': method,
        'SERVER_NAME': host,
        'SERVER_PORT': port,
        'QUERY_STRING': query,
        'PATH_INFO': path,
        'SCRIPT_NAME': script_name,
        'wsgi.url_scheme': scheme,
        })
    if fatal:
        environ['wsgi.errors'] = FatalWarner()
    else:
        environ['wsgi.errors'] = StringIO()

    if params:
        if not isinstance(params, (str, bytes)):
            params = urlencode(params, doseq=True)
        elif isinstance(params, bytes):
            params = params.decode('utf-8')
        if method in QUERY_METHODS or input is not None:
            if environ['QUERY_STRING']:
                environ['QUERY_STRING'] += '&' + params
            else:
                environ['QUERY_STRING'] = params
        else:
            input = params
            environ['CONTENT_TYPE'] = 'application/x-www-form-urlencoded'

    environ['wsgi.input'] = _input_stream(input)
    environ['CONTENT_LENGTH'] = str(len(environ['wsgi.input'].getvalue()))

    for header, value in (headers or {}).items():
        key = header.replace('-', '_').upper()
        if key not in ('CONTENT_TYPE', 'CONTENT_LENGTH'):
            key = 'HTTP_' + key
        environ[key] = str(value)
    if extra_environ:
        environ.update(extra_environ)
    return environ

class MockRequest(object):

    """
    Calls ``app`` with mocked requests, returning ``MockResponse``
    objects.

    ``app`` may also be a Paste Deploy URI (like
    ``'config:test.ini'``), which is loaded with ``loadapp``.  If a
    ``logger`` (or a configured ``TransLogger``) is given, every
    request is logged through it.
    """

    # for py.test
    __test__ = False

    def __init__(self, app, logger=None, relative_to=None):
        if isinstance(app, str):
            from paste.deploy import loadapp
            app = loadapp(app, relative_to=relative_to)
        self.app = app
        self.translogger = None
        if logger is not None:
            if not isinstance(logger, TransLogger):
                logger = TransLogger(logger)
            self.translogger = logger

    def get(self, url='', **opts):
        return self.request('GET', url, **opts)

    def post(self, url='', **opts):
        return self.request('POST', url, **opts)

    def put(self, url='', **opts):
        return self.request('PUT', url, **opts)

    def patch(self, url='', **opts):
        return self.request('PATCH', url, **opts)

    def delete(self, url='', **opts):
        return self.request('DELETE', url, **opts)

    def head(self, url='', **opts):
        return self.request('HEAD', url, **opts)

    def request(self, method='GET', url='', lint=False, **opts):
        """
        Runs a request and returns the ``MockResponse``.  ``opts`` are
        passed to ``env_for``; with ``lint`` the application is checked
        for WSGI compliance while it runs.
        """
        # Hide from py.test:
        __tracebackhide__ = True
        environ = env_for(url, method=method, **opts)
        app = self.app
        if lint:
            app = Lint(app)
        start = time.time()
        status, headers, body, errors = wsgilib.raw_interactive(app, environ)
        res = MockResponse(status, headers, body, errors)
        res.environ = environ
        res.time = time.time() - start
        if self.translogger is not None:
            self.translogger(res, start)
        return res

class MockResponse(ResponseHelpers):

    """
    The result of a mocked request: status, headers, body and whatever
    the application wrote to ``wsgi.errors``.
    """

    # for py.test
    __test__ = False

    def __init__(self, status, headers, body, errors=''):
        if isinstance(status, int):
            status = status_line(status)
        self.full_status = status
        self.status = int(status.split()[0])
        self.original_headers = headers
        self.headers = HeaderDict.fromlist(headers)
        if isinstance(body, str):
            body = body.encode('utf-8')
        self.body = body
        self.errors = errors
        self.environ = None
        # seconds the request took
        self.time = None
        self._normal_body = None

    _charset_re = re.compile(r';\s*charset=([^;]*)', re.I)

    def charset(self):
        match = self._charset_re.search(self.content_type or '')
        if match:
            return match.group(1).strip('"\' ')
        return 'utf-8'
    charset = property(charset)

    def text(self):
        """The body decoded with the charset of the Content-Type"""
        return self.body.decode(self.charset, 'replace')
    text = property(text, doc=text.__doc__)

    def __getitem__(self, name):
        return self.headers[name]

    def has_header(self, name):
        return name in self.headers

    def header(self, name, default=NO_DEFAULT):
        """
        Returns the named header; an error if there is not exactly one
        matching header (unless you give a default -- always an error
        if there is more than one header)
        """
        found = self.all_headers(name)
        assert len(found) <= 1, (
            "Ambiguous header: %s matches %r" % (name, found))
        if not found:
            if default is NO_DEFAULT:
                raise KeyError(
                    "No header found: %r (from %s)"
                    % (name, ', '.join([n for n, v in self.original_headers])))
            return default
        return found[0]

    def all_headers(self, name):
        """
        Gets all headers, returns as a list
        """
        found = []
        for cur_name, value in self.original_headers:
            if cur_name.lower() == name.lower():
                found.append(value)
        return found

    _normal_body_regex = re.compile(r'[ \n\r\t]+')

    def normal_body(self):
        if self._normal_body is None:
            self._normal_body = self._normal_body_regex.sub(
                ' ', self.text)
        return self._normal_body
    normal_body = property(normal_body)

    def __contains__(self, name):
        """
        A response 'contains' a header name if it has that header;
        the name is case-insensitive.  Use ``mustcontain`` or
        ``match`` to look in the body.
        """
        return name in self.headers

    def body_contains(self, s):
        """
        Is ``s`` present in the body?  Whitespace is normalized when
        searching for a string.
        """
        if isinstance(s, bytes):
            return s in self.body
        if not isinstance(s, str):
            s = str(s)
        return s in self.text or s in self.normal_body

    def match(self, pattern, flags=0):
        """
        Searches the body text for ``pattern`` (a string or compiled
        regular expression); returns the match object or None.
        """
        if isinstance(pattern, str):
            pattern = re.compile(pattern, flags)
        return pattern.search(self.text)

    def mustcontain(self, *strings):
        """
        Assert that the body of the response contains all of the
        strings passed in as arguments.

        Equivalent to::

            assert res.body_contains(string)
        """
        for s in strings:
            if not self.body_contains(s):
                print("Actual response (no %r):" % s, file=sys.stderr)
                print(self, file=sys.stderr)
                raise IndexError(
                    "Body does not contain string %r" % s)

    def __repr__(self):
        return '<%s %s %r>' % (self.__class__.__name__, self.full_status,
                               self.body[:20])

    def __str__(self):
        simple_body = '\n'.join([l for l in self.text.splitlines()
                                 if l.strip()])
        return 'Response: %s\n%s\n%s' % (
            self.full_status,
            '\n'.join(['%s: %s' % (n, v) for n, v in self.original_headers]),
            simple_body)
