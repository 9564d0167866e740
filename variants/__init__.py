"""
Repository Variants Application

One codebase ships as three repository variants. This Django app works out
which one the running checkout is and which optional features it exposes.

VARIANTS:
- private: the main branch, every feature
- public: published copy, advanced/experimental features hidden
- sandbox: playground copy, every feature

RESOLUTION ORDER (first match wins):
  1. .repository-type marker file
  2. REPOSITORY_TYPE environment variable
  3. git branch (main -> private, public -> public, sandbox -> sandbox)
  4. default: private

  If no marker file exists, the resolved variant is written to it.

BROWSER HAND-OFF:
  manage.py set_variant writes static/js/repository-type.js, which sets
  window.__REPOSITORY_TYPE__ for the statically served front end.

USAGE:
    # Switch variant and regenerate the browser asset
    python manage.py set_variant public

    # Show what this checkout resolves to
    python manage.py detect_variant

    # In Python
    from variants.context import get_variant_context
    from variants.registry import Feature

    gate = get_variant_context().gate
    if gate.is_enabled(Feature.ADVANCED_REPORTING):
        ...

    # In templates (context processor)
    {% if features.ADVANCED_REPORTING %} ... {% endif %}

VERSION: 1.0.0
"""

__version__ = '1.0.0'

# Version history:
# 1.0.0 - Variant resolution, persistence and feature gate
