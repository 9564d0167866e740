"""
Management command to switch the repository variant

Usage:
python manage.py set_variant private
python manage.py set_variant public
python manage.py set_variant sandbox
"""

from django.core.management.base import BaseCommand, CommandError

from variants.branch import check_branch_consistency, current_branch
from variants.conf import get_variant_settings
from variants.gate import FeatureGate
from variants.management.output import write_banner, write_feature_table
from variants.persister import VariantPersister, VariantPersistError
from variants.registry import VARIANT_CHOICES, parse_variant

USAGE = f"Usage: python manage.py set_variant <{'|'.join(VARIANT_CHOICES)}>"


class Command(BaseCommand):
    help = 'Set the repository variant: writes the marker file and the browser asset'

    def add_arguments(self, parser):
        parser.add_argument(
            'variant',
            help=f"One of: {', '.join(VARIANT_CHOICES)} (case-insensitive)",
        )

    def handle(self, *args, **options):
        raw = options['variant']
        variant = parse_variant(raw)

        # Validate before touching any file
        if variant is None:
            raise CommandError(
                f"Invalid repository type {raw!r}! Please use one of: {', '.join(VARIANT_CHOICES)}\n{USAGE}"
            )

        variant_settings = get_variant_settings()
        persister = VariantPersister.from_settings(variant_settings)

        self.stdout.write(f"Setting repository type to: {variant.value}")
        try:
            persister.persist(variant)
        except VariantPersistError as e:
            raise CommandError(f"❌ {e}") from e

        self.stdout.write(self.style.SUCCESS(f"✓ Marker file written: {persister.marker_path}"))
        self.stdout.write(self.style.SUCCESS(f"✓ Browser asset written: {persister.asset_path}"))

        write_banner(self, f"Repository type is now: {variant.value.upper()}")

        branch_check = check_branch_consistency(variant, current_branch(variant_settings.git_cwd))
        if not branch_check.consistent:
            self.stdout.write(self.style.WARNING(f"⚠️  {branch_check.warning}"))

        write_feature_table(self, FeatureGate(variant))

        self.stdout.write('\nRefresh your browser to see the changes')
