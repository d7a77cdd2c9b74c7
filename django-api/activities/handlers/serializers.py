"""Serializers for request parsing and for rendering domain models.

Input serializers only check format. Domain rules are applied by services.
"""

from rest_framework import serializers

from activities.domain import ActivityProposal


class MemberSerializer(serializers.Serializer):
    """Serializer for Member domain model."""

    id = serializers.CharField()
    username = serializers.CharField()


class TagSerializer(serializers.Serializer):
    """Serializer for Tag domain model."""

    id = serializers.CharField()
    name = serializers.CharField()


class AddressSerializer(serializers.Serializer):
    """Serializer for Address domain model."""

    id = serializers.CharField()
    street = serializers.CharField()
    city = serializers.CharField()
    zip_code = serializers.CharField()
    country = serializers.CharField()


class ActivitySerializer(serializers.Serializer):
    """Serializer for Activity domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    date = serializers.DateField()
    start_time = serializers.TimeField(format="%H:%M")
    end_time = serializers.TimeField(format="%H:%M")
    num_places = serializers.IntegerField()
    free_places = serializers.IntegerField()
    age_limit = serializers.IntegerField()
    creator = serializers.CharField(source="creator.username")
    address_id = serializers.CharField(allow_null=True)
    tags = TagSerializer(many=True)
    participants = MemberSerializer(many=True)
    waiting_list = MemberSerializer(many=True)


class RatingSerializer(serializers.Serializer):
    """Serializer for Rating domain model."""

    activity_id = serializers.CharField()
    member_id = serializers.CharField()
    rating = serializers.IntegerField()
    comment = serializers.CharField(allow_blank=True)


class ActivityProposalSerializer(serializers.Serializer):
    """Request body for creating or updating an activity."""

    name = serializers.CharField(allow_blank=True)
    description = serializers.CharField(allow_blank=True)
    year = serializers.IntegerField()
    month = serializers.IntegerField()
    day = serializers.IntegerField()
    start_hour = serializers.IntegerField()
    start_minute = serializers.IntegerField()
    end_hour = serializers.IntegerField()
    end_minute = serializers.IntegerField()
    num_places = serializers.IntegerField()
    age_limit = serializers.IntegerField(default=0)

    def to_proposal(self) -> ActivityProposal:
        return ActivityProposal(**self.validated_data)


class ActivitySearchSerializer(serializers.Serializer):
    """Query parameters for listing and searching activities."""

    upcoming = serializers.BooleanField(required=False, default=False)
    tag = serializers.CharField(required=False)
    city = serializers.CharField(required=False)
    country = serializers.CharField(required=False)
    name = serializers.CharField(required=False)
    date = serializers.DateField(required=False)

    def has_criteria(self) -> bool:
        return any(key in self.validated_data for key in ("tag", "city", "country", "name", "date"))


class TagNamesSerializer(serializers.Serializer):
    names = serializers.ListField(child=serializers.CharField(), allow_empty=True)


class TagInputSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True)


class AddressInputSerializer(serializers.Serializer):
    street = serializers.CharField(allow_blank=True, default="")
    city = serializers.CharField(allow_blank=True)
    zip_code = serializers.CharField(allow_blank=True, default="")
    country = serializers.CharField(allow_blank=True)


class RatingInputSerializer(serializers.Serializer):
    rating = serializers.IntegerField()
    comment = serializers.CharField(allow_blank=True, default="")
