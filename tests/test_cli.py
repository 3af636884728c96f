import importlib
import json
import sys

import pytest

# Import run.py as a module and exercise parse_args + main with a patched
# start_server so no networking starts.


@pytest.fixture()
def run_module():
    if 'run' in sys.modules:
        del sys.modules['run']
    return importlib.import_module('run')


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert 'Arcana Crawler' in out


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == 'server'


def test_server_main_invokes_start_server(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv('PORT', '5555')
    monkeypatch.setenv('HOST', '127.0.0.1')
    monkeypatch.delenv('FLASK_DEBUG', raising=False)
    import arcana.server as server_mod

    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)
    assert run_module.main(['server']) == 0
    assert calls == {'host': '127.0.0.1', 'port': 5555, 'debug': False}


def test_server_flags_override_env(monkeypatch, run_module):
    calls = {}
    monkeypatch.setenv('PORT', '5555')
    import arcana.server as server_mod

    monkeypatch.setattr(server_mod, 'start_server', lambda host, port, debug: calls.update(port=port, debug=debug))
    run_module.main(['server', '--port', '8081', '--debug'])
    assert calls == {'port': 8081, 'debug': True}


def test_env_file_argument(monkeypatch, tmp_path, run_module):
    env_file = tmp_path / '.env'
    env_file.write_text('PORT=6001\n')
    # setenv first so teardown also drops the value the .env file loads
    monkeypatch.setenv('PORT', '0')
    monkeypatch.delenv('PORT')
    calls = {}
    import arcana.server as server_mod

    monkeypatch.setattr(server_mod, 'start_server', lambda host, port, debug: calls.update(port=port))
    run_module.main(['--env-file', str(env_file), 'server'])
    assert calls['port'] == 6001


def test_generate_prints_grid(run_module, capsys):
    assert run_module.main(['generate', '--width', '9', '--height', '7', '--seed', '3']) == 0
    rows = capsys.readouterr().out.strip().splitlines()
    assert len(rows) == 7
    assert all(len(r) == 9 for r in rows)
    assert rows[0] == 'W' * 9
    assert rows[1][1] == 'S'
    assert sum(r.count('D') for r in rows) == 1


def test_generate_is_seeded(run_module, capsys):
    run_module.main(['generate', '--width', '11', '--height', '11', '--seed', '8'])
    first = capsys.readouterr().out
    run_module.main(['generate', '--width', '11', '--height', '11', '--seed', '8'])
    assert capsys.readouterr().out == first


def test_generate_with_metrics(run_module, capsys):
    run_module.main(['generate', '--width', '9', '--height', '9', '--seed', '1', '--metrics'])
    out = capsys.readouterr().out
    lines = out.splitlines()
    metrics = json.loads('\n'.join(lines[9:]))
    assert metrics['cells_carved'] == 2 * 4 * 4 - 1


def test_generate_rejects_even_width(run_module, capsys):
    assert run_module.main(['generate', '--width', '10']) == 2
    assert 'width' in capsys.readouterr().err
