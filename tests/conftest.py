"""Shared fixtures: every test gets its own marker file, browser asset and fake git."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from variants.context import reset_variant_context


@dataclass
class FakeGit:
    branch: str | None = None
    commit: str | None = None


@dataclass
class VariantEnv:
    root: Path
    marker: Path
    asset: Path
    git: FakeGit

    def write_marker(self, content):
        self.marker.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def variant_env(tmp_path, settings, monkeypatch):
    marker = tmp_path / ".repository-type"
    asset = tmp_path / "static" / "js" / "repository-type.js"

    settings.VARIANT_CONFIG = {
        'MARKER_FILE': marker,
        'ENV_VAR': 'REPOSITORY_TYPE',
        'BROWSER_ASSET': asset,
        'GLOBAL_NAME': '__REPOSITORY_TYPE__',
        'RESOLVE_ON_STARTUP': False,
        'VERSION': '1.0.0',
        'ENVIRONMENT': 'development',
        'GIT_CWD': tmp_path,
    }

    for name in ('REPOSITORY_TYPE', 'BUILD_DATE', 'BUILD_NUMBER', 'GIT_COMMIT'):
        monkeypatch.delenv(name, raising=False)

    git = FakeGit()
    monkeypatch.setattr('variants.resolver.current_branch', lambda cwd=None: git.branch)
    monkeypatch.setattr(
        'variants.management.commands.set_variant.current_branch', lambda cwd=None: git.branch
    )
    monkeypatch.setattr('variants.version.current_commit', lambda cwd=None: git.commit)

    reset_variant_context()
    yield VariantEnv(root=tmp_path, marker=marker, asset=asset, git=git)
    reset_variant_context()
