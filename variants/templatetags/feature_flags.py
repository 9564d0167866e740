from django import template

from variants.context import get_variant_context

register = template.Library()


@register.simple_tag
def feature_enabled(feature):
    """
    {% feature_enabled "ADVANCED_REPORTING" as show_reports %}

    Unknown feature names give False.
    """
    return get_variant_context().gate.is_enabled(feature)


@register.filter
def available_in(feature, variant):
    """{{ "BETA_FEATURES"|available_in:"public" }}"""
    return get_variant_context().gate.is_available_in(feature, variant)


@register.inclusion_tag('variants/_version_indicator.html')
def version_indicator():
    context = get_variant_context()
    return {
        'repository_variant': context.variant.value,
        'version_info': context.version_info,
        'enabled_statuses': [s for s in context.gate.all_features() if s.enabled],
    }
