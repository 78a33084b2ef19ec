import logging
import re

from wsgimock.echo import application
from wsgimock.mock import MockRequest, MockResponse, env_for
from wsgimock.translogger import TransLogger

def test_logs_through_mock_request(caplog):
    logger = logging.getLogger('wsgimock.tests')
    with caplog.at_level(logging.INFO, logger='wsgimock.tests'):
        res = MockRequest(application, logger=logger).get(
            '/path?status=404', lint=True,
            headers={'User-Agent': 'pytest', 'Referer': '/from'},
            extra_environ={'REMOTE_ADDR': '127.0.0.1'})
    assert res.not_found
    assert res.time >= 0
    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert message.startswith('127.0.0.1 - - [')
    assert re.search(
        r'"GET http://example.org/path\?status=404 HTTP/1.0" 404 '
        r'%d "/from" "pytest"$' % len(res.body), message)

def test_counts_body_bytes(caplog):
    def app(environ, start_response):
        start_response('200 OK', [('Content-Type', 'text/plain')])
        return [b'hel', b'lo']
    logger = logging.getLogger('wsgimock.tests')
    with caplog.at_level(logging.INFO, logger='wsgimock.tests'):
        MockRequest(app, logger=logger).post(
            'https://example.org:8443/upload', script_name='/app')
    message = caplog.records[0].getMessage()
    assert message.endswith(
        '"POST https://example.org:8443/app/upload HTTP/1.0" 200 5 "-" "-"')

def test_empty_body(caplog):
    logger = logging.getLogger('wsgimock.tests')
    with caplog.at_level(logging.INFO, logger='wsgimock.tests'):
        MockRequest(application, logger=logger).get('/?status=204')
    assert ' 204 - ' in caplog.records[0].getMessage()

def test_errors_logged(caplog):
    logger = logging.getLogger('wsgimock.tests')
    with caplog.at_level(logging.INFO, logger='wsgimock.tests'):
        MockRequest(application, logger=logger).get('/?error=disk+full')
    assert [r.levelno for r in caplog.records] == [
        logging.INFO, logging.WARNING]
    assert caplog.records[1].getMessage() == 'wsgi.errors: disk full'

def test_custom_format(caplog):
    translogger = TransLogger(logging.getLogger('wsgimock.tests'),
                              format='%(REQUEST_METHOD)s %(status)s',
                              level=logging.WARNING)
    with caplog.at_level(logging.WARNING, logger='wsgimock.tests'):
        MockRequest(application, logger=translogger).delete(
            '/?status=302')
    assert caplog.records[0].getMessage() == 'DELETE 302'
    assert caplog.records[0].levelno == logging.WARNING

def test_default_logger(caplog):
    res = MockResponse(200, [('Content-Type', 'text/plain')], b'')
    res.environ = env_for('/direct', method='head')
    with caplog.at_level(logging.INFO, logger='wsgimock'):
        TransLogger()(res)
    record = caplog.records[0]
    assert record.name == 'wsgimock'
    assert '"HEAD http://example.org/direct HTTP/1.0" 200 -' in (
        record.getMessage())
