# variants/resolver.py
"""
Resolution of the effective repository variant.

Signals are checked in a fixed order and the first usable one wins:

    1. marker file (.repository-type)
    2. REPOSITORY_TYPE environment variable
    3. git branch (main -> private, public -> public, sandbox -> sandbox)
    4. default: private

The marker file outranks the environment so that an explicit
``manage.py set_variant`` stays in force even when a stale REPOSITORY_TYPE
is still exported in the shell or .env file.

When no marker file exists, the resolved variant is written to it so later
runs stop at step 1. A marker file with unreadable or unknown content is left
alone.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .branch import current_branch, normalize_branch, variant_for_branch
from .persister import VariantPersistError, atomic_write
from .registry import DEFAULT_VARIANT, RepositoryVariant, VARIANT_CHOICES, parse_variant


logger = logging.getLogger(__name__)


class SignalSource(Enum):
    MARKER_FILE = "marker_file"
    ENVIRONMENT = "environment"
    BRANCH = "branch"
    DEFAULT = "default"

    @property
    def label(self):
        return {
            SignalSource.MARKER_FILE: "marker file",
            SignalSource.ENVIRONMENT: "environment variable",
            SignalSource.BRANCH: "git branch",
            SignalSource.DEFAULT: "default",
        }[self]


@dataclass(frozen=True)
class Resolution:
    variant: RepositoryVariant
    source: SignalSource
    branch: str | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)
    adopted: bool = False


_BRANCH_NOT_READ = object()


class VariantResolver:
    """
    Works out which variant this checkout is.

    ``environ`` defaults to os.environ and ``branch_reader`` to a git query;
    both can be replaced, which is how the tests drive it.
    """

    def __init__(self, marker_path, env_var="REPOSITORY_TYPE", environ=None,
                 branch_reader=None, adopt_marker=True):
        self.marker_path = Path(marker_path)
        self.env_var = env_var
        self.environ = os.environ if environ is None else environ
        self.branch_reader = branch_reader if branch_reader is not None else current_branch
        self.adopt_marker = adopt_marker

    @classmethod
    def from_settings(cls, variant_settings, **kwargs):
        kwargs.setdefault('branch_reader', lambda: current_branch(variant_settings.git_cwd))
        return cls(
            marker_path=variant_settings.marker_file,
            env_var=variant_settings.env_var,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------

    def _read_marker(self, warnings):
        """
        Returns (exists, variant).

        A file that cannot be checked or read, or holds an unknown token, is
        reported as existing with no variant.
        """
        try:
            exists = self.marker_path.exists()
        except OSError as e:
            message = f"Could not check marker file {self.marker_path}: {e}. Ignoring it."
            logger.warning(message)
            warnings.append(message)
            return True, None

        if not exists:
            logger.debug(f"No marker file at {self.marker_path}")
            return False, None

        try:
            content = self.marker_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            message = f"Could not read marker file {self.marker_path}: {e}. Ignoring it."
            logger.warning(message)
            warnings.append(message)
            return True, None

        variant = parse_variant(content)
        if variant is None:
            message = (
                f"Marker file {self.marker_path} contains {content.strip()!r}; "
                f"expected one of: {', '.join(VARIANT_CHOICES)}. Ignoring it."
            )
            logger.warning(message)
            warnings.append(message)
        return True, variant

    def _read_environment(self, warnings):
        raw = self.environ.get(self.env_var)
        if raw is None or not raw.strip():
            logger.debug(f"Environment variable {self.env_var} is not set")
            return None

        variant = parse_variant(raw)
        if variant is None:
            message = (
                f"Environment variable {self.env_var}={raw.strip()!r} is not a repository "
                f"variant; expected one of: {', '.join(VARIANT_CHOICES)}. Ignoring it."
            )
            logger.warning(message)
            warnings.append(message)
        return variant

    def _read_branch(self):
        try:
            return normalize_branch(self.branch_reader())
        except Exception:
            # The branch is optional; a broken reader must not stop resolution.
            logger.warning("Branch lookup failed; ignoring the branch signal", exc_info=True)
            return None

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def detect(self) -> Resolution:
        """Resolve the variant and report which signal decided it."""
        warnings = []
        branch = _BRANCH_NOT_READ

        marker_exists, variant = self._read_marker(warnings)
        source = SignalSource.MARKER_FILE

        if variant is None:
            variant = self._read_environment(warnings)
            source = SignalSource.ENVIRONMENT

        if variant is None:
            branch = self._read_branch()
            variant = variant_for_branch(branch)
            source = SignalSource.BRANCH

        if variant is None:
            variant = DEFAULT_VARIANT
            source = SignalSource.DEFAULT

        if branch is _BRANCH_NOT_READ:
            branch = self._read_branch()

        adopted = False
        if not marker_exists and self.adopt_marker:
            adopted = self._adopt(variant, warnings)

        return Resolution(
            variant=variant,
            source=source,
            branch=branch,
            warnings=tuple(warnings),
            adopted=adopted,
        )

    def resolve(self) -> RepositoryVariant:
        return self.detect().variant

    def _adopt(self, variant, warnings) -> bool:
        try:
            atomic_write(self.marker_path, variant.value)
        except VariantPersistError as e:
            message = f"Could not create marker file: {e}"
            logger.warning(message)
            warnings.append(message)
            return False
        return True
