# variants/version.py
"""
Version information shown alongside the repository variant.

Purely descriptive. Nothing gates on these values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from django.conf import settings
from django.utils import timezone

from .branch import current_commit
from .registry import Feature, RepositoryVariant, all_features


@dataclass(frozen=True)
class VersionInfo:
    version: str
    variant: RepositoryVariant
    environment: str
    build_date: str | None = None
    build_number: str | None = None
    commit_hash: str | None = None
    features: tuple[Feature, ...] = field(default_factory=tuple)

    def display_version(self) -> str:
        return f"v{self.version}"

    def detailed_version(self) -> str:
        return f"v{self.version} ({self.variant.value} - {self.environment})"

    def is_production(self) -> bool:
        return self.environment == "production"

    def is_sandbox(self) -> bool:
        return self.environment == "sandbox"

    def to_dict(self):
        return {
            "version": self.version,
            "display_version": self.display_version(),
            "detailed_version": self.detailed_version(),
            "variant": self.variant.value,
            "environment": self.environment,
            "build_date": self.build_date,
            "build_number": self.build_number,
            "commit_hash": self.commit_hash,
            "features": [f.value for f in self.features],
        }


def _environment(variant_settings):
    if variant_settings.environment:
        return variant_settings.environment
    return "development" if settings.DEBUG else "production"


def build_version_info(variant, variant_settings, environ=None) -> VersionInfo:
    """
    Assemble VersionInfo for a resolved variant.

    Build metadata comes from BUILD_DATE, BUILD_NUMBER and GIT_COMMIT when a
    deploy pipeline exports them; otherwise the build date is now and the
    commit is read from git if available.
    """
    environ = os.environ if environ is None else environ

    return VersionInfo(
        version=variant_settings.version,
        variant=variant,
        environment=_environment(variant_settings),
        build_date=environ.get("BUILD_DATE") or timezone.now().isoformat(),
        build_number=environ.get("BUILD_NUMBER") or None,
        commit_hash=environ.get("GIT_COMMIT") or current_commit(variant_settings.git_cwd),
        features=tuple(flag.key for flag in all_features() if flag.is_available_in(variant)),
    )
