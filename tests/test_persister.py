"""Tests for writing the marker file and the browser asset."""

import stat

import pytest

from variants.persister import VariantPersister, VariantPersistError, render_browser_asset
from variants.registry import RepositoryVariant
from variants.signals import variant_persisted


@pytest.fixture
def persister(variant_env):
    return VariantPersister(variant_env.marker, variant_env.asset)


class TestPersist:
    def test_writes_marker_and_asset(self, persister, variant_env):
        persister.persist(RepositoryVariant.PUBLIC)

        assert variant_env.marker.read_text() == "public"
        assert variant_env.asset.read_text() == 'window.__REPOSITORY_TYPE__ = "public";\n'

    def test_creates_asset_directory(self, persister, variant_env):
        assert not variant_env.asset.parent.exists()
        persister.persist(RepositoryVariant.SANDBOX)
        assert variant_env.asset.exists()

    def test_overwrites_previous_content(self, persister, variant_env):
        variant_env.write_marker("  staging\n")
        persister.persist(RepositoryVariant.PRIVATE)
        persister.persist(RepositoryVariant.SANDBOX)

        assert variant_env.marker.read_text() == "sandbox"
        assert "sandbox" in variant_env.asset.read_text()

    def test_idempotent(self, persister, variant_env):
        persister.persist(RepositoryVariant.PUBLIC)
        first = (variant_env.marker.read_text(), variant_env.asset.read_text())
        persister.persist(RepositoryVariant.PUBLIC)

        assert (variant_env.marker.read_text(), variant_env.asset.read_text()) == first

    def test_leaves_no_temporary_files(self, persister, variant_env):
        persister.persist(RepositoryVariant.PUBLIC)

        assert sorted(p.name for p in variant_env.root.iterdir()) == [".repository-type", "static"]
        assert [p.name for p in variant_env.asset.parent.iterdir()] == ["repository-type.js"]

    def test_accepts_plain_strings(self, persister, variant_env):
        persister.persist("sandbox")
        assert variant_env.marker.read_text() == "sandbox"

    def test_plain_strings_are_lowercased(self, persister, variant_env):
        persister.persist(" PUBLIC ")

        assert variant_env.marker.read_text() == "public"
        assert variant_env.asset.read_text() == 'window.__REPOSITORY_TYPE__ = "public";\n'

    def test_new_files_are_world_readable(self, persister, variant_env):
        persister.persist(RepositoryVariant.PUBLIC)

        assert stat.S_IMODE(variant_env.marker.stat().st_mode) == 0o644
        assert stat.S_IMODE(variant_env.asset.stat().st_mode) == 0o644

    def test_existing_mode_is_kept(self, persister, variant_env):
        variant_env.write_marker("private")
        variant_env.marker.chmod(0o664)

        persister.persist(RepositoryVariant.SANDBOX)

        assert stat.S_IMODE(variant_env.marker.stat().st_mode) == 0o664

    def test_sends_signal(self, persister, variant_env):
        received = []

        def listener(sender, **kwargs):
            received.append(kwargs)

        variant_persisted.connect(listener)
        try:
            persister.persist(RepositoryVariant.SANDBOX)
        finally:
            variant_persisted.disconnect(listener)

        assert len(received) == 1
        assert received[0]["variant"] is RepositoryVariant.SANDBOX
        assert received[0]["marker_path"] == variant_env.marker


class TestFailures:
    def test_asset_failure_propagates(self, variant_env):
        blocker = variant_env.root / "static"
        blocker.write_text("not a directory")
        persister = VariantPersister(variant_env.marker, blocker / "js" / "repository-type.js")

        with pytest.raises(VariantPersistError) as excinfo:
            persister.persist(RepositoryVariant.PUBLIC)

        assert "repository-type.js" in str(excinfo.value)
        assert isinstance(excinfo.value, OSError)

    def test_marker_failure_propagates_before_asset(self, variant_env):
        variant_env.marker.mkdir()
        persister = VariantPersister(variant_env.marker, variant_env.asset)

        with pytest.raises(VariantPersistError) as excinfo:
            persister.persist(RepositoryVariant.PUBLIC)

        assert excinfo.value.path == variant_env.marker
        assert not variant_env.asset.exists()


class TestBrowserAsset:
    def test_custom_global(self):
        assert render_browser_asset("private", "__VARIANT__") == 'window.__VARIANT__ = "private";\n'

    def test_value_is_quoted(self):
        assert render_browser_asset('x"; alert(1); "') == 'window.__REPOSITORY_TYPE__ = "x\\"; alert(1); \\"";\n'

    def test_from_settings(self, variant_env):
        from variants.conf import get_variant_settings

        persister = VariantPersister.from_settings(get_variant_settings())
        assert persister.marker_path == variant_env.marker
        assert persister.asset_path == variant_env.asset
        assert persister.global_name == "__REPOSITORY_TYPE__"
