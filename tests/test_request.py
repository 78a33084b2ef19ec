# (c) 2005 Ben Bangert
# This module is part of the Python Paste Project and is released under
# the MIT License: http://www.opensource.org/licenses/mit-license.php
from wsgimock.mock import MockRequest, env_for
from wsgimock.request import (
    EnvironHeaders, Request, construct_url, get_cookie_dict,
    parse_formvars, parse_querystring)
from wsgimock.response import Response

def simpleapp(environ, start_response):
    request = Request(environ)
    body = ['Hello world!\n',
            'The get is %s' % request.GET,
            ' and Val is %s' % request.GET.get('name'),
            ' and the post is %s' % request.POST.mixed()]
    return Response(body, headers={'Content-type': 'text/plain'})(
        environ, start_response)

def test_gets():
    app = MockRequest(simpleapp)
    res = app.get('/', lint=True)
    res.mustcontain('Hello')
    assert res.body_contains("get is MultiDict([])")

    res = app.get('/?name=george')
    res.mustcontain("get is MultiDict([('name', 'george')])")
    res.mustcontain("Val is george")

def test_posts():
    app = MockRequest(simpleapp)
    res = app.post('/', params={'name': 'fred'}, lint=True)
    res.mustcontain("post is {'name': 'fred'}")
    res = app.get('/', params={'name': 'fred'})
    res.mustcontain("post is {}")

def test_request_attributes():
    environ = env_for('https://bla.example.org:9292/meh/foo?bar=1',
                      script_name='/app',
                      headers={'Cookie': 'a=b; c=d',
                               'X-Requested-With': 'XMLHttpRequest'})
    req = Request(environ)
    assert req.method == 'GET'
    assert req.scheme == 'https'
    assert req.host == 'bla.example.org'
    assert req.port == 9292
    assert req.script_name == '/app'
    assert req.path_info == '/meh/foo'
    assert req.path == '/app/meh/foo'
    assert req.query_string == 'bar=1'
    assert req.url == 'https://bla.example.org:9292/app/meh/foo?bar=1'
    assert req.content_length == 0
    assert req.content_type == ''
    assert req.is_xhr
    assert req.cookies == {'a': 'b', 'c': 'd'}
    assert req.params.mixed() == {'bar': '1'}

def test_http_host_wins():
    environ = env_for('/', headers={'Host': 'other.example.com:8080'})
    req = Request(environ)
    assert req.host == 'other.example.com:8080'
    assert construct_url(environ) == 'http://other.example.com/'

def test_construct_url():
    environ = env_for('https://example.org/a/b?x=y')
    assert construct_url(environ) == 'https://example.org/a/b?x=y'
    assert construct_url(environ, with_query_string=False) == (
        'https://example.org/a/b')
    assert construct_url(environ, with_path_info=False) == (
        'https://example.org?x=y')
    assert construct_url(environ, script_name='/s', path_info='/p',
                         querystring='q=1') == 'https://example.org/s/p?q=1'

def test_parse_querystring_cached():
    environ = env_for('/?a=1&a=2&b=')
    parsed = parse_querystring(environ)
    assert parsed == [('a', '1'), ('a', '2'), ('b', '')]
    assert parse_querystring(environ) is parsed
    environ['QUERY_STRING'] = 'c=3'
    assert parse_querystring(environ) == [('c', '3')]
    assert parse_querystring(env_for('/')) == []

def test_parse_formvars():
    environ = env_for('/', method='POST', input='a=1&b=2&a=3',
                      headers={'Content-Type': 'application/x-www-form-urlencoded; charset=utf-8'})
    formvars = parse_formvars(environ)
    assert formvars.getall('a') == ['1', '3']
    assert parse_formvars(environ) is formvars

    environ = env_for('/', method='POST', input='{"a": 1}',
                      headers={'Content-Type': 'application/json'})
    assert len(parse_formvars(environ)) == 0
    assert environ['wsgi.input'].read() == b'{"a": 1}'

def test_environ_headers():
    environ = env_for('/', headers={'User-Agent': 'tests',
                                    'Content-Type': 'text/plain'})
    headers = EnvironHeaders(environ)
    assert headers['user-agent'] == 'tests'
    assert headers['Content-Type'] == 'text/plain'
    assert 'User-Agent' in headers
    assert headers.get('Referer') is None
    assert 'User-Agent' in headers.keys()
    assert 'Content-Type' in headers.keys()
    headers['Referer'] = 'http://example.org/'
    assert environ['HTTP_REFERER'] == 'http://example.org/'
    del headers['Referer']
    assert 'HTTP_REFERER' not in environ

def test_no_cookies():
    assert get_cookie_dict(env_for('/')) == {}
