"""
CLI tests.
"""

import json

import pytest

from aeye import main as main_module
from aeye.main import build_parser, main


@pytest.fixture(autouse=True)
def use_config(config, monkeypatch):
    monkeypatch.setattr(main_module, 'settings', config)


def test_infer(capsys):
    code = main(['infer', '--input', '0.1', '0.2', '0.3', '--shape', '1', '3'])

    body = json.loads(capsys.readouterr().out)
    assert code == 0
    assert body['status'] == 'success'
    assert isinstance(body['result'], float)


def test_infer_shape_mismatch(capsys):
    code = main(['infer', '--input', '0.1', '--shape', '1', '3'])

    body = json.loads(capsys.readouterr().out)
    assert code == 1
    assert body['error']['code'] == 'SHAPE_MISMATCH'


def test_infer_unknown_method(capsys):
    code = main(['infer', '--input', '0.1', '--shape', '1', '--method', 'other'])

    assert code == 0
    assert json.loads(capsys.readouterr().out)['status'] == 'not_implemented'


def test_infer_without_model(asset_dir, capsys):
    (asset_dir / 'model.pt').unlink()

    code = main(['infer', '--input', '0.1', '0.2', '0.3', '--shape', '1', '3'])

    assert code == 1
    assert json.loads(capsys.readouterr().out)['error']['code'] == 'RESOURCE_UNAVAILABLE'


def test_materialize(files_dir, capsys):
    code = main(['materialize'])

    assert code == 0
    assert capsys.readouterr().out.strip() == str((files_dir / 'model.pt').absolute())


def test_serve_arguments():
    args = build_parser().parse_args(['serve', '--port', '9000'])

    assert args.func is main_module.cmd_serve
    assert args.port == 9000
