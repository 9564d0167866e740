# variants/persister.py
"""
Writes the resolved variant where later stages can find it.

Two files are produced:
- the marker file, read back by the resolver on the next run
- a one-line browser script assigning the variant to a window global, for the
  statically served front end which cannot read files or environment variables

Both are replaced atomically, so concurrent writers end with the last one's
value and never with a half-written file.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from .registry import RepositoryVariant
from .signals import variant_persisted


logger = logging.getLogger(__name__)

# new files get this instead of mkstemp's 0600
DEFAULT_FILE_MODE = 0o644


class VariantPersistError(OSError):
    """A marker file or browser asset could not be written."""

    def __init__(self, path, error):
        self.path = Path(path)
        self.error = error
        super().__init__(f"Could not write {self.path}: {error}")


def _variant_value(variant) -> str:
    if isinstance(variant, RepositoryVariant):
        return variant.value
    return str(variant).strip().lower()


def render_browser_asset(variant, global_name="__REPOSITORY_TYPE__") -> str:
    return f"window.{global_name} = {json.dumps(_variant_value(variant))};\n"


def _file_mode(path) -> int:
    """Mode of the file being replaced, or DEFAULT_FILE_MODE for a new one."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        return DEFAULT_FILE_MODE


def atomic_write(path, content: str):
    """Replace ``path`` with ``content``, raising VariantPersistError on failure."""
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise VariantPersistError(path, e) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.debug(f"Could not remove temporary file {tmp_name}")


class VariantPersister:
    """
    Commits a variant to the marker file and the browser asset.

    The variant is not validated here; that is the resolver's job.
    """

    def __init__(self, marker_path, asset_path, global_name="__REPOSITORY_TYPE__"):
        self.marker_path = Path(marker_path)
        self.asset_path = Path(asset_path)
        self.global_name = global_name

    @classmethod
    def from_settings(cls, variant_settings):
        return cls(
            marker_path=variant_settings.marker_file,
            asset_path=variant_settings.browser_asset,
            global_name=variant_settings.global_name,
        )

    def write_marker(self, variant):
        atomic_write(self.marker_path, _variant_value(variant))
        logger.info(f"Marker file {self.marker_path} set to '{_variant_value(variant)}'")

    def write_asset(self, variant):
        atomic_write(self.asset_path, render_browser_asset(variant, self.global_name))
        logger.info(f"Browser asset {self.asset_path} set to '{_variant_value(variant)}'")

    def persist(self, variant):
        """
        Write the marker file, then the browser asset.

        Raises VariantPersistError if either write fails.
        """
        self.write_marker(variant)
        self.write_asset(variant)

        variant_persisted.send(
            sender=self.__class__,
            variant=variant,
            marker_path=self.marker_path,
            asset_path=self.asset_path,
        )
