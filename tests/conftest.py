"""
Shared fixtures: a tiny 1-input/1-output model bundled into a temporary
asset directory, and settings pointing at temporary storage.
"""

import pytest
import torch

from aeye.bridge import reset_bridge
from aeye.core.config import Settings

MODEL_FILE = '16AEYEMODEL.ptl'


class TinyModel(torch.nn.Module):
    def __init__(self):
        super().__init__()
        self.linear = torch.nn.Linear(3, 1)

    def forward(self, x):
        return torch.sigmoid(self.linear(x))


@pytest.fixture
def scripted_model():
    torch.manual_seed(0)
    return torch.jit.script(TinyModel().eval())


@pytest.fixture
def asset_dir(tmp_path, scripted_model):
    path = tmp_path / 'assets'
    path.mkdir()
    scripted_model.save(str(path / 'model.pt'))
    scripted_model._save_for_lite_interpreter(str(path / MODEL_FILE))
    return path


@pytest.fixture
def files_dir(tmp_path):
    return tmp_path / 'files'


@pytest.fixture
def config(tmp_path, asset_dir, files_dir):
    return Settings(
        model_file_name='model.pt',
        asset_dir=asset_dir,
        files_dir=files_dir,
        log_dir=tmp_path / 'logs',
    )


@pytest.fixture(autouse=True)
def clean_bridge():
    reset_bridge()
    yield
    reset_bridge()
