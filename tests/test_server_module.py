import logging
import os

import pytest

from arcana import server


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_configure_logging_writes_instance_log(monkeypatch, tmp_path, restore_root_logging):
    monkeypatch.setattr(server.app, 'instance_path', str(tmp_path / 'instance'))
    path = server._configure_logging(debug=True)
    assert path == os.path.join(str(tmp_path / 'instance'), 'app.log')
    root = restore_root_logging
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    logging.getLogger('arcana.test').info('hello from test')
    for h in root.handlers:
        h.flush()
    with open(path) as fh:
        assert 'hello from test' in fh.read()


def test_configure_logging_is_repeatable(monkeypatch, tmp_path, restore_root_logging):
    monkeypatch.setattr(server.app, 'instance_path', str(tmp_path))
    server._configure_logging()
    server._configure_logging()
    assert len(restore_root_logging.handlers) == 2
    assert restore_root_logging.level == logging.INFO


def test_unhandled_error_returns_json():
    from arcana import internal_error

    resp, status = internal_error(RuntimeError('boom'))
    assert status == 500
    data = resp.get_json()
    assert data['error'] == 'internal'
    assert len(data['error_id']) == 8
