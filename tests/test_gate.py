"""Tests for FeatureGate, the template provider and the view guard."""

import pytest
from django.http import Http404, HttpResponse
from django.template import Context, Template
from django.test import RequestFactory

from variants.context import build_variant_context, get_variant_context
from variants.context_processors import feature_flags
from variants.decorators import feature_required
from variants.gate import FeatureGate
from variants.registry import Feature, RepositoryVariant


class TestFeatureGate:
    @pytest.mark.parametrize("variant,enabled", [
        ("private", set(Feature)),
        ("sandbox", set(Feature)),
        ("public", {Feature.PRIVACY_AGREEMENTS, Feature.AUDIT_LOGGING}),
    ])
    def test_enabled_features(self, variant, enabled):
        gate = FeatureGate(variant)

        assert gate.enabled_features() == frozenset(enabled)
        for feature in Feature:
            assert gate.is_enabled(feature) is (feature in enabled)

    def test_advanced_reporting(self):
        gate = FeatureGate(RepositoryVariant.PUBLIC)

        assert gate.is_available_in(Feature.ADVANCED_REPORTING, "private") is True
        assert gate.is_available_in(Feature.ADVANCED_REPORTING, "sandbox") is True
        assert gate.is_available_in(Feature.ADVANCED_REPORTING, "public") is False

    @pytest.mark.parametrize("feature", ["NOT_A_FEATURE", "", None, 7, "CORE_FEATURES"])
    def test_unknown_feature_is_closed(self, feature):
        gate = FeatureGate("private")

        assert gate.is_enabled(feature) is False
        assert gate.is_available_in(feature, "sandbox") is False
        assert gate.get_feature_config(feature) is None

    def test_unknown_variant_query_is_closed(self):
        assert FeatureGate("private").is_available_in(Feature.AUDIT_LOGGING, "staging") is False

    def test_string_keys(self):
        gate = FeatureGate("sandbox")
        assert gate.is_enabled("BETA_FEATURES") is True
        assert gate.is_enabled("beta_features") is True

    def test_invalid_variant_rejected(self):
        with pytest.raises(ValueError):
            FeatureGate("staging")

    def test_all_features(self):
        statuses = FeatureGate("public").all_features()

        assert [s.key for s in statuses] == list(Feature)
        assert {s.key for s in statuses if s.enabled} == {Feature.PRIVACY_AGREEMENTS, Feature.AUDIT_LOGGING}
        assert statuses[0].to_dict()["variant"] == "public"

    def test_template_flags_are_read_only(self):
        flags = FeatureGate("public").as_template_flags()

        assert flags["AUDIT_LOGGING"] is True
        assert flags["BETA_FEATURES"] is False
        assert flags.get("NOT_A_FEATURE") is None
        with pytest.raises(TypeError):
            flags["BETA_FEATURES"] = True

    def test_no_mutation_entry_points(self):
        gate = FeatureGate("public")
        with pytest.raises(AttributeError):
            gate.variant = RepositoryVariant.PRIVATE
        with pytest.raises(AttributeError):
            gate.enabled = True


class TestVariantContext:
    def test_built_lazily_and_cached(self, variant_env):
        variant_env.write_marker("sandbox")

        context = get_variant_context()

        assert context.variant is RepositoryVariant.SANDBOX
        assert get_variant_context() is context

    def test_branch_check_attached(self, variant_env):
        variant_env.write_marker("public")
        variant_env.git.branch = "main"

        context = build_variant_context()

        assert context.branch_check.consistent is False
        assert context.branch_check.expected_branch == "public"
        assert context.gate.variant is RepositoryVariant.PUBLIC
        assert context.version_info.variant is RepositoryVariant.PUBLIC


class TestTemplateProvider:
    def test_context_processor(self, variant_env, rf):
        variant_env.write_marker("public")

        data = feature_flags(rf.get("/"))

        assert data["repository_variant"] == "public"
        assert data["features"]["ADVANCED_REPORTING"] is False
        assert data["feature_registry"]["ADVANCED_REPORTING"] == {
            "private": True, "public": False, "sandbox": True,
        }
        assert data["version_info"].detailed_version() == "v1.0.0 (public - development)"

    def test_unknown_template_flag_renders_falsy(self):
        template = Template("{% if features.NOT_A_FEATURE %}shown{% else %}hidden{% endif %}")
        rendered = template.render(Context({"features": FeatureGate("private").as_template_flags()}))
        assert rendered == "hidden"

    @pytest.mark.parametrize("variant,expected", [("private", "True"), ("public", "False")])
    def test_feature_enabled_tag(self, variant_env, variant, expected):
        variant_env.write_marker(variant)
        template = Template(
            '{% load feature_flags %}{% feature_enabled "EXPERIMENTAL_UI" as on %}{{ on }}'
        )
        assert template.render(Context()) == expected

    def test_available_in_filter(self):
        template = Template('{% load feature_flags %}{{ "BETA_FEATURES"|available_in:"public" }}')
        assert template.render(Context()) == "False"


class TestFeatureRequired:
    def _view(self, feature):
        @feature_required(feature)
        def view(request):
            return HttpResponse("ok")
        return view

    def test_enabled_feature_passes(self, variant_env):
        variant_env.write_marker("sandbox")
        response = self._view(Feature.ADVANCED_REPORTING)(RequestFactory().get("/"))
        assert response.content == b"ok"

    def test_disabled_feature_is_404(self, variant_env):
        variant_env.write_marker("public")
        with pytest.raises(Http404):
            self._view(Feature.ADVANCED_REPORTING)(RequestFactory().get("/"))

    def test_unknown_feature_is_404(self, variant_env):
        variant_env.write_marker("private")
        with pytest.raises(Http404):
            self._view("NOT_A_FEATURE")(RequestFactory().get("/"))
