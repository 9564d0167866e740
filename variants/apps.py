from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class VariantsConfig(AppConfig):
    """
    Configuration for the Variants application.

    This app decides which repository variant the site runs as:
    - private (main branch, every feature)
    - public (reduced feature set)
    - sandbox (every feature, for trying things out)

    Features:
    - Variant resolution from marker file, REPOSITORY_TYPE, git branch
    - Branch consistency warnings
    - Marker file + browser asset written by manage.py set_variant
    - Feature gate exposed to templates, views and the API
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'variants'
    verbose_name = 'Repository Variants'

    variant_context = None

    def ready(self):
        """
        Resolve the variant once for this process, without creating the marker file.

        Signals handle:
        - Logging which signal decided the variant
        - Branch mismatch warnings
        - Logging persisted variants
        """
        import variants.signals  # noqa: F401
        from .conf import get_variant_settings
        from .context import build_variant_context

        if get_variant_settings().resolve_on_startup:
            # Also runs before every management command: no marker writes here
            self.variant_context = build_variant_context(adopt_marker=False)
            logger.info(f"Running as {self.variant_context.version_info.detailed_version()}")
