# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Logging of mocked requests, one line each in Apache combined log
format.

``MockRequest`` calls a ``TransLogger`` with every response it builds
when it is given a ``logger``::

    req = MockRequest(app, logger=logging.getLogger('myapp.tests'))

The logged request URI is the full URL the request was made for, and
the byte count is the length of the body the application returned.
Anything the application wrote to ``wsgi.errors`` is logged as well,
a line at a time, at WARNING.
"""

import logging
import time

from wsgimock.request import construct_url

__all__ = ['TransLogger']

class TransLogger(object):

    """
    Logs responses to ``logger`` (by default the ``'wsgimock'``
    logger) at ``level``.  ``format`` is a ``%``-style format over the
    fields of ``fields()``.
    """

    format = ('%(REMOTE_ADDR)s - %(REMOTE_USER)s [%(time)s] '
              '"%(REQUEST_METHOD)s %(REQUEST_URI)s %(HTTP_VERSION)s" '
              '%(status)s %(bytes)s "%(HTTP_REFERER)s" "%(HTTP_USER_AGENT)s"')

    def __init__(self, logger=None, format=None, level=logging.INFO):
        if logger is None:
            logger = logging.getLogger('wsgimock')
        self.logger = logger
        if format is not None:
            self.format = format
        self.level = level

    def __call__(self, res, start=None):
        """
        Logs ``res``, a ``MockResponse`` with its ``environ`` set.
        ``start`` is when the request began (seconds since the
        epoch); the default is now.
        """
        if start is None:
            start = time.time()
        self.logger.log(self.level, self.format, self.fields(res, start))
        for line in res.errors.splitlines():
            if line.strip():
                self.logger.warning('wsgi.errors: %s', line)

    def fields(self, res, start):
        environ = res.environ
        return {
            'REMOTE_ADDR': environ.get('REMOTE_ADDR') or '-',
            'REMOTE_USER': environ.get('REMOTE_USER') or '-',
            'REQUEST_METHOD': environ['REQUEST_METHOD'],
            'REQUEST_URI': construct_url(environ),
            'HTTP_VERSION': environ.get('SERVER_PROTOCOL') or 'HTTP/1.0',
            'time': time.strftime('%d/%b/%Y:%H:%M:%S',
                                  time.localtime(start)),
            'status': res.status,
            'bytes': len(res.body) or '-',
            'HTTP_REFERER': environ.get('HTTP_REFERER', '-'),
            'HTTP_USER_AGENT': environ.get('HTTP_USER_AGENT', '-'),
            'elapsed': res.time,
            }
