"""
Asset materializer tests: copy once, trust what is already there, and fail
with ResourceUnavailable without leaving files behind.
"""

import pytest

from aeye.assets import materializer as materializer_module
from aeye.assets.materializer import AssetMaterializer
from aeye.core.errors import ResourceUnavailable

from .conftest import MODEL_FILE


def make(asset_dir, files_dir, name=MODEL_FILE):
    return AssetMaterializer(asset_dir=asset_dir, files_dir=files_dir, model_file_name=name)


class TestEnsurePresent:

    def test_first_call_copies_bundled_asset(self, asset_dir, files_dir):
        path = make(asset_dir, files_dir).ensure_present()

        assert path == (files_dir / MODEL_FILE).absolute()
        assert path.is_absolute()
        assert path.read_bytes() == (asset_dir / MODEL_FILE).read_bytes()

    def test_second_call_does_not_rewrite(self, asset_dir, files_dir):
        materializer = make(asset_dir, files_dir)
        first = materializer.ensure_present()
        original = first.read_bytes()

        # A changed bundle must not leak into an existing copy
        (asset_dir / MODEL_FILE).write_bytes(b'changed')
        second = materializer.ensure_present()

        assert second == first
        assert second.read_bytes() == original

    def test_present_destination_needs_no_source(self, asset_dir, files_dir):
        materializer = make(asset_dir, files_dir)
        materializer.ensure_present()

        (asset_dir / MODEL_FILE).unlink()

        assert materializer.ensure_present().exists()

    def test_existing_destination_is_trusted(self, asset_dir, files_dir):
        files_dir.mkdir()
        (files_dir / MODEL_FILE).write_bytes(b'not a model')

        path = make(asset_dir, files_dir).ensure_present()

        assert path.read_bytes() == b'not a model'

    def test_missing_asset_creates_nothing(self, asset_dir, files_dir):
        (asset_dir / MODEL_FILE).unlink()

        with pytest.raises(ResourceUnavailable) as exc_info:
            make(asset_dir, files_dir).ensure_present()

        assert exc_info.value.code == 'RESOURCE_UNAVAILABLE'
        assert not (files_dir / MODEL_FILE).exists()

    def test_unwritable_destination(self, asset_dir, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('a file where a directory should be')

        with pytest.raises(ResourceUnavailable):
            make(asset_dir, blocker / 'files').ensure_present()

    def test_failed_copy_leaves_no_partial_file(self, asset_dir, files_dir, monkeypatch):
        def broken_copy(src, dst, length=0):
            dst.write(b'partial')
            raise OSError("disk full")

        monkeypatch.setattr(materializer_module.shutil, 'copyfileobj', broken_copy)

        with pytest.raises(ResourceUnavailable) as exc_info:
            make(asset_dir, files_dir).ensure_present()

        assert 'disk full' in exc_info.value.details
        assert list(files_dir.iterdir()) == []

    def test_retry_after_failure_copies(self, asset_dir, files_dir):
        materializer = make(asset_dir, files_dir)
        source = asset_dir / MODEL_FILE
        data = source.read_bytes()
        source.unlink()

        with pytest.raises(ResourceUnavailable):
            materializer.ensure_present()

        source.write_bytes(data)
        assert materializer.ensure_present().read_bytes() == data
