"""
A-Eye Model Asset Materializer
Copies the bundled model out of read-only package storage on first use
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Union

from ..core.errors import ResourceUnavailable

logger = logging.getLogger('aeye.assets')

CHUNK_SIZE = 64 * 1024


class AssetMaterializer:
    """
    Guarantees the model file exists at ``<files_dir>/<model_file_name>``.

    The first call that finds the destination absent streams the bundled
    asset into place. Later calls only check for existence: a file at the
    destination path is trusted as-is and never re-copied or re-validated.
    """

    def __init__(
        self,
        asset_dir: Union[str, Path],
        files_dir: Union[str, Path],
        model_file_name: str
    ):
        self.asset_dir = Path(asset_dir)
        self.files_dir = Path(files_dir)
        self.model_file_name = model_file_name

    @property
    def source_path(self) -> Path:
        return self.asset_dir / self.model_file_name

    @property
    def destination_path(self) -> Path:
        return (self.files_dir / self.model_file_name).absolute()

    def ensure_present(self) -> Path:
        """Return the absolute destination path, copying the asset if needed"""
        destination = self.destination_path

        if destination.exists():
            logger.debug(f"Model asset already present: {destination}")
            return destination

        logger.info(f"Materializing model asset: {self.source_path} -> {destination}")
        self._copy(destination)
        logger.info(f"Model asset ready: {destination} ({destination.stat().st_size} bytes)")
        return destination

    def _copy(self, destination: Path):
        # Open the bundled stream first so a missing asset creates nothing
        try:
            source = open(self.source_path, 'rb')
        except OSError as e:
            logger.error(f"Bundled model asset unavailable: {self.source_path}: {e}")
            raise ResourceUnavailable(
                f"Bundled asset '{self.model_file_name}' is missing or unreadable",
                details=str(e)
            ) from e

        with source:
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
                staged = tempfile.NamedTemporaryFile(
                    delete=False,
                    dir=destination.parent,
                    prefix=f".{self.model_file_name}.",
                    suffix='.part'
                )
            except OSError as e:
                logger.error(f"Destination not writable: {destination.parent}: {e}")
                raise ResourceUnavailable(
                    f"Cannot write model asset to '{destination.parent}'",
                    details=str(e)
                ) from e

            try:
                with staged:
                    shutil.copyfileobj(source, staged, CHUNK_SIZE)
                os.replace(staged.name, destination)
            except OSError as e:
                logger.error(f"Model asset copy failed: {e}")
                raise ResourceUnavailable(
                    f"Copying '{self.model_file_name}' failed",
                    details=str(e)
                ) from e
            finally:
                if os.path.exists(staged.name):
                    os.remove(staged.name)
