import yaml

from wsgimock.echo import application
from wsgimock.mock import MockRequest

CONFIG = """\
[app:main]
use = call:wsgimock.echo:make_app
"""

def test_load_from_config(tmp_path):
    config = tmp_path / 'test.ini'
    config.write_text(CONFIG)
    req = MockRequest('config:%s' % config)
    assert req.app is application
    res = req.get('/loaded', lint=True)
    assert res.ok
    assert yaml.safe_load(res.body)['PATH_INFO'] == '/loaded'

def test_load_relative_config(tmp_path):
    (tmp_path / 'relative.ini').write_text(CONFIG)
    req = MockRequest('config:relative.ini', relative_to=str(tmp_path))
    assert req.app is application
