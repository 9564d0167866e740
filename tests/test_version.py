"""Tests for VersionInfo and variant settings."""

import pytest
from django.core.exceptions import ImproperlyConfigured

from variants.conf import get_variant_settings
from variants.registry import Feature, RepositoryVariant
from variants.version import VersionInfo, build_version_info


class TestVersionInfo:
    def test_strings(self):
        info = VersionInfo(version="1.2.0", variant=RepositoryVariant.SANDBOX, environment="sandbox")

        assert info.display_version() == "v1.2.0"
        assert info.detailed_version() == "v1.2.0 (sandbox - sandbox)"
        assert info.is_sandbox() is True
        assert info.is_production() is False

    def test_build_metadata_from_environment(self):
        info = build_version_info(
            RepositoryVariant.PUBLIC,
            get_variant_settings(),
            environ={"BUILD_DATE": "2026-10-01T00:00:00Z", "BUILD_NUMBER": "42", "GIT_COMMIT": "abc1234"},
        )

        assert info.build_date == "2026-10-01T00:00:00Z"
        assert info.build_number == "42"
        assert info.commit_hash == "abc1234"
        assert info.features == (Feature.PRIVACY_AGREEMENTS, Feature.AUDIT_LOGGING)

    def test_commit_falls_back_to_git(self, variant_env):
        variant_env.git.commit = "deadbee"

        info = build_version_info(RepositoryVariant.PRIVATE, get_variant_settings(), environ={})

        assert info.commit_hash == "deadbee"
        assert info.build_number is None
        assert info.build_date

    def test_environment_follows_debug_when_unset(self, settings):
        settings.VARIANT_CONFIG = {**settings.VARIANT_CONFIG, 'ENVIRONMENT': None}

        settings.DEBUG = True
        assert build_version_info(RepositoryVariant.PRIVATE, get_variant_settings(), environ={}).environment == "development"

        settings.DEBUG = False
        info = build_version_info(RepositoryVariant.PRIVATE, get_variant_settings(), environ={})
        assert info.environment == "production"
        assert info.is_production() is True

    def test_to_dict(self):
        info = build_version_info(RepositoryVariant.PRIVATE, get_variant_settings(), environ={})
        data = info.to_dict()

        assert data["variant"] == "private"
        assert data["display_version"] == "v1.0.0"
        assert data["features"] == [f.value for f in Feature]


class TestVariantSettings:
    def test_relative_paths_use_base_dir(self, settings, tmp_path):
        settings.BASE_DIR = tmp_path
        settings.VARIANT_CONFIG = {'MARKER_FILE': 'deploy/.repository-type'}

        config = get_variant_settings()

        assert config.marker_file == tmp_path / "deploy" / ".repository-type"
        assert config.browser_asset == tmp_path / "static" / "js" / "repository-type.js"
        assert config.env_var == "REPOSITORY_TYPE"
        assert config.git_cwd == tmp_path

    def test_unknown_key(self, settings):
        settings.VARIANT_CONFIG = {'MARKER': '.repository-type'}
        with pytest.raises(ImproperlyConfigured, match="MARKER"):
            get_variant_settings()

    def test_bad_environment(self, settings):
        settings.VARIANT_CONFIG = {'ENVIRONMENT': 'staging'}
        with pytest.raises(ImproperlyConfigured):
            get_variant_settings()

    def test_bad_global_name(self, settings):
        settings.VARIANT_CONFIG = {'GLOBAL_NAME': 'window.type'}
        with pytest.raises(ImproperlyConfigured):
            get_variant_settings()
