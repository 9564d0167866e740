"""Console output shared by the variant management commands."""


def write_banner(command, text, style=None):
    style = style or command.style.SUCCESS
    command.stdout.write(style('=' * 60))
    command.stdout.write(style(text))
    command.stdout.write(style('=' * 60))


def write_feature_table(command, gate):
    """One line per registered feature, enabled or disabled for the gate's variant."""
    command.stdout.write(f"\nFeatures in the {gate.variant.value.upper()} repository:")
    for status in gate.all_features():
        if status.enabled:
            command.stdout.write(command.style.SUCCESS(f"- {status.title}: ✅ Enabled"))
        else:
            command.stdout.write(command.style.ERROR(f"- {status.title}: ❌ Disabled"))
