from rest_framework import serializers


class FeatureStatusSerializer(serializers.Serializer):
    """Serializer for one feature flag and whether it is on"""

    key = serializers.CharField(source='key.value', read_only=True)
    title = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    enabled = serializers.BooleanField(read_only=True)
    availability = serializers.SerializerMethodField()

    def get_availability(self, obj):
        """Per-variant availability, straight from the registry"""
        return obj.flag.to_dict()['availability']


class VersionInfoSerializer(serializers.Serializer):
    """Serializer for VersionInfo"""

    version = serializers.CharField(read_only=True)
    display_version = serializers.CharField(read_only=True)
    detailed_version = serializers.CharField(read_only=True)
    variant = serializers.CharField(source='variant.value', read_only=True)
    environment = serializers.CharField(read_only=True)
    build_date = serializers.CharField(read_only=True, allow_null=True)
    build_number = serializers.CharField(read_only=True, allow_null=True)
    commit_hash = serializers.CharField(read_only=True, allow_null=True)
    features = serializers.SerializerMethodField()

    def get_features(self, obj):
        return [f.value for f in obj.features]


class VariantContextSerializer(serializers.Serializer):
    """Read-only view of the running variant, its version and its features"""

    variant = serializers.CharField(source='variant.value', read_only=True)
    source = serializers.CharField(source='resolution.source.value', read_only=True)
    branch = serializers.CharField(source='resolution.branch', read_only=True, allow_null=True)
    branch_consistent = serializers.BooleanField(source='branch_check.consistent', read_only=True)
    expected_branch = serializers.CharField(source='branch_check.expected_branch', read_only=True)
    version = VersionInfoSerializer(source='version_info', read_only=True)
    features = serializers.SerializerMethodField()

    def get_features(self, obj):
        return FeatureStatusSerializer(obj.gate.all_features(), many=True).data
