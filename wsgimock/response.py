# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Building responses and inspecting their status and headers.

``Response`` collects a body, status and headers and can be returned
from (or called as) a WSGI application.  ``ResponseHelpers`` gives any
object with an integer ``status`` and a case-insensitive ``headers``
mapping the usual status classifications.
"""
from http.client import responses
from http.cookies import SimpleCookie

__all__ = ['HeaderDict', 'Response', 'ResponseHelpers', 'has_header',
           'header_value', 'remove_header', 'status_line']

# Statuses that must not carry a message body (RFC 2616 sec. 10)
NO_MESSAGE_BODY = (204, 304)

def status_line(code):
    """
    Returns the full status line for an integer code, like
    ``'404 Not Found'``.
    """
    code = int(code)
    return '%s %s' % (code, responses.get(code, 'Unknown'))

############################################################
## Headers
############################################################

class HeaderDict(dict):

    """
    This represents response headers.  It handles the headers as a
    dictionary, with case-insensitive keys.  The spelling a name was
    set with is remembered and used again by ``.headeritems()``.

    Also there is an ``.add(key, value)`` method, which sets the key,
    or adds the value to the current value (turning it into a list if
    necessary).

    For passing to WSGI there is a ``.headeritems()`` method which is
    like ``.items()`` but unpacks value that are lists.
    """

    def __init__(self, other=None, **kw):
        dict.__init__(self)
        # normalized name -> name as given
        self._names = {}
        if other is not None:
            self.update(other)
        if kw:
            self.update(kw)

    def __getitem__(self, key):
        return dict.__getitem__(self, self.normalize(key))

    def __setitem__(self, key, value):
        name = str(key).strip()
        self._names[self.normalize(name)] = name
        dict.__setitem__(self, self.normalize(name), value)

    def __delitem__(self, key):
        dict.__delitem__(self, self.normalize(key))
        del self._names[self.normalize(key)]

    def __contains__(self, key):
        return dict.__contains__(self, self.normalize(key))

    def get(self, key, default=None):
        return dict.get(self, self.normalize(key), default)

    def pop(self, key, *args):
        self._names.pop(self.normalize(key), None)
        return dict.pop(self, self.normalize(key), *args)

    def setdefault(self, key, default=None):
        if key not in self:
            self[key] = default
        return self[key]

    def clear(self):
        dict.clear(self)
        self._names.clear()

    def update(self, other):
        if isinstance(other, HeaderDict):
            for key in other:
                self[other.name(key)] = dict.__getitem__(other, key)
        else:
            for key in other:
                self[key] = other[key]

    def copy(self):
        return self.__class__(self)

    def normalize(self, key):
        return str(key).lower().strip()

    def name(self, key):
        """The spelling ``key`` was first set with"""
        return self._names.get(self.normalize(key), key)

    def add(self, key, value):
        if key in self:
            current = self[key]
            if isinstance(current, list):
                current.append(value)
            else:
                # Keeps the spelling of the first value
                dict.__setitem__(self, self.normalize(key), [current, value])
        else:
            self[key] = value

    def headeritems(self):
        result = []
        for key in self:
            name = self.name(key)
            value = dict.__getitem__(self, key)
            if isinstance(value, list):
                for v in value:
                    result.append((name, str(v)))
            else:
                result.append((name, str(value)))
        return result

    @classmethod
    def fromlist(cls, headers):
        """
        Builds a HeaderDict from a WSGI header list; repeated headers
        become lists.
        """
        result = cls()
        for name, value in headers:
            result.add(name, value)
        return result

def has_header(headers, name):
    """
    Is header named ``name`` present in headers?
    """
    name = name.lower()
    for header, value in headers:
        if header.lower() == name:
            return True
    return False

def header_value(headers, name):
    """
    Returns the header's value, or None if no such header.  If a
    header appears more than once, all the values of the headers
    are joined with ','
    """
    name = name.lower()
    result = [value for header, value in headers
              if header.lower() == name]
    if result:
        return ','.join(result)
    else:
        return None

def remove_header(headers, name):
    """
    Removes the named header from the list of headers.  Returns the
    value of that header, or None if no header found.  If multiple
    headers are found, only the last one is returned.
    """
    name = name.lower()
    i = 0
    result = None
    while i < len(headers):
        if headers[i][0].lower() == name:
            result = headers[i][1]
            del headers[i]
            continue
        i += 1
    return result

############################################################
## Status helpers
############################################################

class ResponseHelpers(object):

    """
    Mixin for anything with an integer ``status`` and a
    case-insensitive ``headers`` mapping.
    """

    @property
    def invalid(self):
        return self.status < 100 or self.status >= 600

    @property
    def informational(self):
        return 100 <= self.status < 200

    @property
    def successful(self):
        return 200 <= self.status < 300

    @property
    def redirection(self):
        return 300 <= self.status < 400

    @property
    def client_error(self):
        return 400 <= self.status < 500

    @property
    def server_error(self):
        return 500 <= self.status < 600

    @property
    def ok(self):
        return self.status == 200

    @property
    def forbidden(self):
        return self.status == 403

    @property
    def not_found(self):
        return self.status == 404

    # Any 3xx, same as ``redirection``
    redirect = redirection

    @property
    def empty(self):
        """True for statuses that are sent without content"""
        return self.status in (201, 204, 304)

    @property
    def content_type(self):
        return self.headers.get('Content-Type')

    @property
    def content_length(self):
        value = self.headers.get('Content-Length')
        if value is None:
            return None
        return int(value)

    @property
    def location(self):
        return self.headers.get('Location')

############################################################
## Response builder
############################################################

class Response(ResponseHelpers):

    """
    A response under construction.  Use like::

        def app(environ, start_response):
            res = Response('Hello', 200, {'Content-Type': 'text/plain'})
            res.write(' world')
            return res(environ, start_response)

    ``status`` may be an integer or a numeric string (as read from a
    query string).  No Content-Length is added; set it yourself if the
    client needs one.
    """

    def __init__(self, body=None, status=200, headers=None):
        self.status = int(status)
        self.headers = HeaderDict()
        self.headers['Content-Type'] = 'text/html'
        if headers:
            self.headers.update(headers)
        self.cookies = SimpleCookie()
        self.body = []
        if body is None:
            body = []
        elif isinstance(body, (str, bytes)):
            body = [body]
        for part in body:
            self.write(part)

    def write(self, data):
        """
        Appends to the body; ``str`` is encoded as UTF-8.
        """
        if isinstance(data, str):
            data = data.encode('utf-8')
        self.body.append(data)
        return data

    def set_cookie(self, key, value, **attrs):
        """
        Sets an outgoing cookie.  ``attrs`` are cookie attributes, with
        ``_`` in place of ``-`` (e.g., ``max_age=60``).
        """
        self.cookies[key] = value
        for name, attr_value in attrs.items():
            self.cookies[key][name.replace('_', '-')] = attr_value

    def delete_cookie(self, key, path='/'):
        """
        Expires the cookie on the client.
        """
        self.set_cookie(key, '', path=path, max_age=0,
                        expires='Thu, 01 Jan 1970 00:00:00 GMT')

    def redirect(self, target, status=302):
        self.status = int(status)
        self.headers['Location'] = target

    def finish(self):
        """
        Returns ``(status, headers, body)`` ready to pass to
        ``start_response`` and return upstream.
        """
        headers = self.headers.headeritems()
        for morsel in self.cookies.values():
            headers.append(('Set-Cookie', morsel.OutputString()))
        if self.status in NO_MESSAGE_BODY:
            remove_header(headers, 'content-type')
            return status_line(self.status), headers, []
        return status_line(self.status), headers, self.body

    def __call__(self, environ, start_response):
        status, headers, body = self.finish()
        start_response(status, headers)
        return body

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__,
                            status_line(self.status))
