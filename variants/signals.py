# variants/signals.py
from django.dispatch import Signal, receiver
import logging

logger = logging.getLogger(__name__)


# ============================================
# SIGNALS
# ============================================

# Sent once per resolution with: resolution, branch_check
variant_resolved = Signal()

# Sent after both files are written with: variant, marker_path, asset_path
variant_persisted = Signal()


# ============================================
# RECEIVERS
# ============================================

@receiver(variant_resolved)
def log_variant_resolved(sender, resolution, branch_check=None, **kwargs):
    """
    Record how the variant was chosen.

    Actions:
    - Log the variant and the signal it came from
    - Log a warning when the branch does not match the variant
    """
    logger.info(
        f"Repository variant resolved: {resolution.variant.value} "
        f"(source: {resolution.source.label}, branch: {resolution.branch or 'n/a'})"
    )
    if resolution.adopted:
        logger.info(f"Marker file created with value: {resolution.variant.value}")

    if branch_check is not None and not branch_check.consistent:
        logger.warning(branch_check.warning)


@receiver(variant_persisted)
def log_variant_persisted(sender, variant, marker_path, asset_path, **kwargs):
    logger.info(
        f"Repository variant persisted: {variant} "
        f"(marker: {marker_path}, browser asset: {asset_path})"
    )
