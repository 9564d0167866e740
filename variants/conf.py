# variants/conf.py
"""
Settings for the variants app.

Values come from ``settings.VARIANT_CONFIG`` merged over DEFAULTS. Paths may
be given as strings or Path objects; relative paths are taken from BASE_DIR.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


DEFAULTS = {
    'MARKER_FILE': '.repository-type',
    'ENV_VAR': 'REPOSITORY_TYPE',
    'BROWSER_ASSET': 'static/js/repository-type.js',
    'GLOBAL_NAME': '__REPOSITORY_TYPE__',
    'RESOLVE_ON_STARTUP': True,
    'VERSION': '1.0.0',
    'ENVIRONMENT': None,
    'GIT_CWD': None,
}

ENVIRONMENTS = ('production', 'sandbox', 'development')


@dataclass(frozen=True)
class VariantSettings:
    marker_file: Path
    env_var: str
    browser_asset: Path
    global_name: str
    resolve_on_startup: bool
    version: str
    environment: str | None
    git_cwd: Path


def _base_dir() -> Path:
    return Path(getattr(settings, 'BASE_DIR', Path.cwd()))


def _path(value, base_dir: Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = base_dir / path
    return path


def get_variant_settings() -> VariantSettings:
    """Read VARIANT_CONFIG from Django settings, filling in defaults."""
    user_config = getattr(settings, 'VARIANT_CONFIG', {}) or {}

    unknown = set(user_config) - set(DEFAULTS)
    if unknown:
        raise ImproperlyConfigured(
            f"Unknown VARIANT_CONFIG keys: {', '.join(sorted(unknown))}"
        )

    config = {**DEFAULTS, **user_config}
    base_dir = _base_dir()

    environment = config['ENVIRONMENT']
    if environment is not None and environment not in ENVIRONMENTS:
        raise ImproperlyConfigured(
            f"VARIANT_CONFIG['ENVIRONMENT'] must be one of {', '.join(ENVIRONMENTS)}, "
            f"got {environment!r}"
        )

    if not str(config['GLOBAL_NAME']).isidentifier():
        raise ImproperlyConfigured(
            f"VARIANT_CONFIG['GLOBAL_NAME'] must be a JavaScript identifier, "
            f"got {config['GLOBAL_NAME']!r}"
        )

    return VariantSettings(
        marker_file=_path(config['MARKER_FILE'], base_dir),
        env_var=config['ENV_VAR'],
        browser_asset=_path(config['BROWSER_ASSET'], base_dir),
        global_name=config['GLOBAL_NAME'],
        resolve_on_startup=bool(config['RESOLVE_ON_STARTUP']),
        version=str(config['VERSION']),
        environment=environment,
        git_cwd=_path(config['GIT_CWD'], base_dir) if config['GIT_CWD'] else base_dir,
    )
