# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php

"""
Running WSGI applications in-process against a prepared environment.
"""

from io import BytesIO, StringIO

__all__ = ['raw_interactive', 'interactive']

def raw_interactive(application, environ):
    """
    Runs the application with the given environment, returning
    ``(status, headers, body, errors)``.  ``errors`` is whatever was
    written to ``wsgi.errors`` (when that stream can give it back).
    """
    errors = environ['wsgi.errors']
    data = {}
    output = BytesIO()
    headers_set = []
    headers_sent = []
    def start_response(status, headers, exc_info=None):
        if exc_info:
            try:
                if headers_sent:
                    # Re-raise original exception only if headers sent
                    raise exc_info[1].with_traceback(exc_info[2])
                # We assume that the sender, who is probably setting
                # the headers a second time /w a 500 has produced
                # a more appropriate response.
            finally:
                # avoid dangling circular reference
                exc_info = None
        elif headers_set:
            # You cannot set the headers more than once, unless the
            # exc_info is provided.
            raise AssertionError("Headers already set and no exc_info!")
        headers_set.append(True)
        data['status'] = status
        data['headers'] = headers
        return output.write
    app_iter = application(environ, start_response)
    try:
        try:
            for s in app_iter:
                headers_sent.append(True)
                if not headers_set:
                    raise AssertionError("Content sent w/o headers!")
                output.write(s)
        except TypeError as e:
            # Typically "iteration over non-sequence", so we want
            # to give better debugging information...
            e.args = ((str(e.args[0]) + ' iterable: %r' % app_iter),) + e.args[1:]
            raise
    finally:
        if hasattr(app_iter, 'close'):
            app_iter.close()
    if not headers_set:
        raise AssertionError(
            "Application %r returned without calling start_response"
            % application)
    if hasattr(errors, 'getvalue'):
        errors = errors.getvalue()
    else:
        errors = ''
    return (data['status'], data['headers'], output.getvalue(), errors)

def interactive(*args, **kw):
    """
    Runs the application interatively, wrapping `raw_interactive` but
    returning the output in a formatted way.
    """
    status, headers, content, errors = raw_interactive(*args, **kw)
    full = StringIO()
    if errors:
        full.write('Errors:\n')
        full.write(errors.strip())
        full.write('\n----------end errors\n')
    full.write(status + '\n')
    for name, value in headers:
        full.write('%s: %s\n' % (name, value))
    full.write('\n')
    full.write(content.decode('utf-8', 'replace'))
    return full.getvalue()
