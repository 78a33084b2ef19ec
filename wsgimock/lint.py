# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Middleware that checks an application, and the environment it is
given, against PEP 3333 while a request runs.  Use like::

    app = Lint(app)

It does not change the request or the response.  A violation raises
``LintError`` (an ``AssertionError``, so test runners report it as a
failed check); questionable but legal requests give a ``WSGIWarning``.
An application iterator that is never closed can only be reported on
stderr, when it is garbage collected.
"""
import re
import sys
import warnings

from wsgimock.response import NO_MESSAGE_BODY

__all__ = ['Lint', 'LintError', 'WSGIWarning', 'make_middleware']

header_name_re = re.compile(r'^[a-zA-Z][a-zA-Z0-9\-_]*$')
bad_header_value_re = re.compile(r'[\000-\037]')

REQUIRED_KEYS = ('REQUEST_METHOD', 'SERVER_NAME', 'SERVER_PORT',
                 'wsgi.version', 'wsgi.url_scheme', 'wsgi.input',
                 'wsgi.errors', 'wsgi.multithread', 'wsgi.multiprocess',
                 'wsgi.run_once')

KNOWN_METHODS = ('GET', 'HEAD', 'POST', 'OPTIONS', 'PUT', 'PATCH',
                 'DELETE', 'TRACE', 'CONNECT')

class LintError(AssertionError):
    """
    The application or its environment breaks PEP 3333
    """

class WSGIWarning(Warning):
    """
    Raised in response to WSGI-spec-related warnings
    """

def check(condition, message, *args):
    if not condition:
        if args:
            message = message % args
        raise LintError(message)

class Lint(object):

    """
    Wraps ``application``, checking each call, the ``start_response``
    it makes, the streams it uses and the body it returns.
    """

    def __init__(self, application):
        self.application = application

    def __call__(self, *args, **kw):
        check(len(args) == 2, "Two arguments required")
        check(not kw, "No keyword arguments allowed")
        environ, start_response = args
        self.check_environ(environ)

        # Filled in once the application has called start_response
        started = []

        def lint_start_response(*args, **kw):
            check(len(args) in (2, 3), "Invalid number of arguments: %s",
                  args)
            check(not kw, "No keyword arguments allowed")
            status, headers = args[:2]
            self.check_status(status)
            self.check_headers(headers)
            self.check_content_type(status, headers)
            if len(args) == 3:
                check(args[2] is None or type(args[2]) is tuple,
                      "exc_info (%r) is not a tuple", args[2])
            started.append(True)
            return WriteWrapper(start_response(*args))

        environ['wsgi.input'] = InputWrapper(environ['wsgi.input'])
        environ['wsgi.errors'] = ErrorWrapper(environ['wsgi.errors'])

        app_iter = self.application(environ, lint_start_response)
        check(app_iter is not None and app_iter is not False,
              "The application must return an iterator, if only an "
              "empty list")
        # A string is iterable, but would be sent a character at a time
        check(not isinstance(app_iter, (str, bytes)),
              "You should not return a string as your application "
              "iterator, instead return a single-item list containing "
              "that string.")
        return IteratorWrapper(app_iter, started)

    def check_environ(self, environ):
        check(type(environ) is dict,
              "Environment is not of the right type: %r", type(environ))
        for key in REQUIRED_KEYS:
            check(key in environ,
                  "Environment missing required key: %r", key)
        if 'QUERY_STRING' not in environ:
            warnings.warn(
                'QUERY_STRING is not in the WSGI environment; '
                'applications that parse it are likely to fail',
                WSGIWarning)
        for key, value in environ.items():
            # Keys with a dot are extensions, of any type
            if '.' not in key:
                check(type(value) is str,
                      "Environmental variable %s is not a string: %r "
                      "(value: %r)", key, type(value), value)
        check(environ['wsgi.url_scheme'] in ('http', 'https'),
              "wsgi.url_scheme unknown: %r", environ['wsgi.url_scheme'])
        if environ['REQUEST_METHOD'] not in KNOWN_METHODS:
            warnings.warn(
                "Unknown REQUEST_METHOD: %r" % environ['REQUEST_METHOD'],
                WSGIWarning)
        for key in ('SCRIPT_NAME', 'PATH_INFO'):
            value = environ.get(key)
            check(not value or value.startswith('/'),
                  "%s doesn't start with /: %r", key, value)

    def check_status(self, status):
        check(type(status) is str, "Status must be a string (not %r)",
              status)
        code = status.split(' ', 1)[0]
        check(len(code) == 3,
              "Status codes must be three characters: %r", code)
        check(code.isdigit() and int(code) >= 100,
              "Status code is invalid: %r", code)
        if len(status) < 4 or status[3] != ' ':
            warnings.warn(
                "The status string (%r) should be a three-digit integer "
                "followed by a single space and a status explanation"
                % status, WSGIWarning)

    def check_headers(self, headers):
        check(type(headers) is list,
              "Headers (%r) must be of type list: %r",
              headers, type(headers))
        for item in headers:
            check(type(item) is tuple and len(item) == 2,
                  "Individual headers must be (name, value) tuples: %r",
                  item)
            name, value = item
            check(type(name) is str and type(value) is str,
                  "Header names and values must be str: %r", item)
            check(name.lower() != 'status',
                  "The Status header cannot be used; HTTP status is not "
                  "given through headers (value: %r).", value)
            check(header_name_re.search(name) and name[-1] not in '-_',
                  "Bad header name: %r", name)
            check(not bad_header_value_re.search(value),
                  "Bad header value: %r", value)

    def check_content_type(self, status, headers):
        code = int(status[:3])
        found = [value for name, value in headers
                 if name.lower() == 'content-type']
        if code in NO_MESSAGE_BODY:
            check(not found,
                  "Content-Type header found in a %s response, which "
                  "must not return content.", code)
        else:
            check(found, "No Content-Type header found in headers (%s)",
                  headers)

class InputWrapper(object):

    def __init__(self, wsgi_input):
        self.input = wsgi_input

    def read(self, *args):
        return self._read('read', *args)

    def readline(self, *args):
        return self._read('readline', *args)

    def readlines(self, *args):
        lines = self.input.readlines(*args)
        for line in lines:
            check(type(line) is bytes,
                  "wsgi.input.readlines() gave %r, not bytes", type(line))
        return lines

    def __iter__(self):
        return iter(self.readline, b'')

    def _read(self, method, *args):
        check(len(args) <= 1,
              "wsgi.input.%s() takes at most one argument", method)
        data = getattr(self.input, method)(*args)
        check(type(data) is bytes,
              "wsgi.input.%s() returned %r, not bytes", method, type(data))
        return data

    def close(self):
        check(False, "input.close() must not be called")

class ErrorWrapper(object):

    def __init__(self, wsgi_errors):
        self.errors = wsgi_errors

    def write(self, s):
        check(type(s) is str,
              "wsgi.errors.write() takes str, not %r", type(s))
        self.errors.write(s)

    def writelines(self, seq):
        for line in seq:
            self.write(line)

    def flush(self):
        self.errors.flush()

    def close(self):
        check(False, "errors.close() must not be called")

class WriteWrapper(object):

    def __init__(self, wsgi_writer):
        self.writer = wsgi_writer

    def __call__(self, s):
        check(type(s) is bytes, "write() takes bytes, not %r", type(s))
        self.writer(s)

class IteratorWrapper(object):

    def __init__(self, app_iter, started):
        self.app_iter = app_iter
        self.iterator = iter(app_iter)
        self.started = started
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self):
        check(not self.closed, "Iterator read after closed")
        chunk = next(self.iterator)
        check(self.started,
              "The application returned and its body is being read, "
              "but start_response has not yet been called")
        check(type(chunk) is bytes,
              "Iterator yielded %r, not bytes", type(chunk))
        return chunk

    def close(self):
        self.closed = True
        if hasattr(self.app_iter, 'close'):
            self.app_iter.close()

    def __del__(self):
        if not self.closed:
            sys.stderr.write(
                "Iterator garbage collected without being closed\n")

def make_middleware(application, global_conf):
    """
    Paste Deploy filter factory for ``Lint``
    """
    return Lint(application)
