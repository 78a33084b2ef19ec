# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
r"""\
WSGI application

Echoes the request environment back as YAML.  Takes variables:

status=code, like
  status=404

error=message, like
  error=foo (writes "foo" to wsgi.errors)

The request body is read and put in ``environ['mock.postdata']``
before the environment is dumped.  Only plain values (strings,
numbers, booleans, tuples of those) are dumped; streams and other objects are
left out.
"""

import yaml

from wsgimock.request import Request
from wsgimock.response import Response

SCALARS = (str, int, float, type(None))

def dump_environ(environ):
    """
    Returns the YAML dump of the plain values in ``environ``.
    """
    data = {}
    for key, value in environ.items():
        if (isinstance(value, tuple)
            and all(isinstance(v, SCALARS) for v in value)):
            value = list(value)
        elif not isinstance(value, SCALARS):
            continue
        data[key] = value
    return yaml.safe_dump(data, default_flow_style=False)

def application(environ, start_response):
    req = Request(environ)
    environ['mock.postdata'] = environ['wsgi.input'].read().decode(
        'utf-8', 'replace')
    error = req.GET.get('error')
    if error is not None:
        environ['wsgi.errors'].write(error + '\n')
        environ['wsgi.errors'].flush()
    try:
        status = int(req.GET.get('status', 200))
    except ValueError:
        # Not a number; like a missing status
        status = 200
    res = Response(dump_environ(environ), status,
                   {'Content-Type': 'text/yaml'})
    return res(environ, start_response)

def make_app(global_conf):
    return application
