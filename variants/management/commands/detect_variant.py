"""
Management command to show which repository variant this checkout resolves to

Usage:
python manage.py detect_variant
python manage.py detect_variant --persist
"""

from django.core.management.base import BaseCommand, CommandError

from variants.conf import get_variant_settings
from variants.context import build_variant_context
from variants.management.output import write_banner, write_feature_table
from variants.persister import VariantPersister, VariantPersistError


class Command(BaseCommand):
    help = 'Detect the repository variant (marker file, REPOSITORY_TYPE, git branch, default)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--persist',
            action='store_true',
            help='Also write the resolved variant to the marker file and the browser asset',
        )

    def handle(self, *args, **options):
        variant_settings = get_variant_settings()
        context = build_variant_context(variant_settings=variant_settings)
        resolution = context.resolution

        write_banner(self, f"Repository Type: {context.variant.value.upper()}")
        self.stdout.write(f"Detected from: {resolution.source.label}")
        self.stdout.write(f"Git branch: {resolution.branch or 'unknown'}")
        self.stdout.write(f"Version: {context.version_info.detailed_version()}")

        if resolution.adopted:
            self.stdout.write(self.style.SUCCESS(
                f"✓ {variant_settings.marker_file.name} file created with value: {context.variant.value}"
            ))

        for warning in resolution.warnings:
            self.stdout.write(self.style.WARNING(f"⚠️  {warning}"))

        if not context.branch_check.consistent:
            self.stdout.write(self.style.WARNING(f"⚠️  {context.branch_check.warning}"))

        write_feature_table(self, context.gate)

        if options['persist']:
            persister = VariantPersister.from_settings(variant_settings)
            try:
                persister.persist(context.variant)
            except VariantPersistError as e:
                raise CommandError(f"❌ {e}") from e
            self.stdout.write(self.style.SUCCESS(f"\n✓ Browser asset written: {persister.asset_path}"))
