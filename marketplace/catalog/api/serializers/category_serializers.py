from rest_framework import serializers

from marketplace.catalog.domain.services.taxonomy_service import MAX_NAME_LENGTH


class NamedEntrySerializer(serializers.Serializer):
    """A category or a college"""

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)


class NamedEntryCreateSerializer(serializers.Serializer):
    """Request body for adding a category or college ad hoc"""

    name = serializers.CharField(max_length=MAX_NAME_LENGTH, help_text="Display name (case-sensitive unique)")
