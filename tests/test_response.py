from wsgimock.mock import MockRequest, MockResponse
from wsgimock.response import (
    HeaderDict, Response, has_header, header_value, remove_header,
    status_line)

def test_status_line():
    assert status_line(200) == '200 OK'
    assert status_line('404') == '404 Not Found'
    assert status_line(799) == '799 Unknown'

def classify(status):
    return MockResponse(status, [('Content-Type', 'text/plain')], b'')

def test_classification():
    res = classify(200)
    assert res.ok and res.successful
    assert not (res.redirect or res.client_error or res.server_error)
    assert not res.empty

    res = classify(101)
    assert res.informational
    assert not res.successful

    res = classify(302)
    assert res.redirect and res.redirection
    assert not res.successful

    res = classify(403)
    assert res.forbidden and res.client_error
    assert not res.not_found

    res = classify(404)
    assert res.not_found and res.client_error

    res = classify(503)
    assert res.server_error
    assert not res.client_error

    for code in (201, 204, 304):
        assert classify(code).empty

    assert classify(99).invalid
    assert classify(600).invalid
    assert not classify(599).invalid

def test_header_accessors():
    res = MockResponse(301, [('Location', '/there'),
                             ('Content-Length', '12'),
                             ('Content-Type', 'text/html')], b'')
    assert res.location == '/there'
    assert res.content_length == 12
    assert res.content_type == 'text/html'

def test_header_dict():
    d = HeaderDict({'Content-Type': 'text/html'})
    assert d['content-type'] == 'text/html'
    assert 'CONTENT-TYPE' in d
    assert d.get('Content-type') == 'text/html'
    d.add('Set-Cookie', 'a=1')
    d.add('set-cookie', 'b=2')
    assert d['Set-Cookie'] == ['a=1', 'b=2']
    assert sorted(d.headeritems()) == [
        ('Content-Type', 'text/html'),
        ('Set-Cookie', 'a=1'),
        ('Set-Cookie', 'b=2')]
    assert d.pop('SET-COOKIE') == ['a=1', 'b=2']
    assert d.pop('set-cookie', None) is None
    del d['Content-Type']
    assert not d

def test_header_dict_keeps_spelling():
    d = HeaderDict({'X-Request-ID': '1'})
    assert d.headeritems() == [('X-Request-ID', '1')]
    assert d['x-request-id'] == '1'
    d['x-request-id'] = '2'
    assert d.headeritems() == [('x-request-id', '2')]
    d['ETag'] = '"abc"'
    copied = d.copy()
    assert sorted(copied.headeritems()) == [
        ('ETag', '"abc"'), ('x-request-id', '2')]
    other = HeaderDict()
    other.update(copied)
    assert other.name('etag') == 'ETag'
    del other['ETAG']
    assert other.name('etag') == 'etag'
    other.clear()
    assert other.headeritems() == []

def test_header_list_helpers():
    headers = [('Content-Type', 'text/html'), ('X-Foo', 'a'),
               ('x-foo', 'b')]
    assert has_header(headers, 'content-type')
    assert not has_header(headers, 'location')
    assert header_value(headers, 'X-FOO') == 'a,b'
    assert header_value(headers, 'location') is None
    assert remove_header(headers, 'x-foo') == 'b'
    assert headers == [('Content-Type', 'text/html')]

def test_response_finish():
    res = Response('Hello', 201, {'Content-Type': 'text/plain'})
    res.write(' world')
    res.write(b'!')
    status, headers, body = res.finish()
    assert status == '201 Created'
    assert headers == [('Content-Type', 'text/plain')]
    assert b''.join(body) == b'Hello world!'
    assert res.successful and res.empty
    assert repr(res) == '<Response 201 Created>'

def test_response_no_content():
    res = Response('ignored', 204)
    status, headers, body = res.finish()
    assert status == '204 No Content'
    assert not has_header(headers, 'content-type')
    assert body == []

def test_response_cookies_and_redirect():
    res = Response()
    res.set_cookie('session', 'abc', path='/', max_age=60)
    res.delete_cookie('old')
    res.redirect('/elsewhere', 303)
    status, headers, body = res.finish()
    assert status == '303 See Other'
    assert header_value(headers, 'location') == '/elsewhere'
    cookies = [v for n, v in headers if n == 'Set-Cookie']
    assert any(c.startswith('session=abc') and 'Max-Age=60' in c
               for c in cookies)
    assert any(c.startswith('old=') and 'Max-Age=0' in c for c in cookies)

def test_response_as_application():
    def app(environ, start_response):
        res = Response(status='418')
        res.headers['Content-Type'] = 'text/plain'
        res.write('short and stout')
        return res(environ, start_response)
    res = MockRequest(app).get('/', lint=True)
    assert res.status == 418
    assert res.client_error
    assert res.body == b'short and stout'
    assert res.content_length is None
