"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
Activities reference addresses and tags; neither exposes a reverse
accessor back to activities.
"""

import uuid

from django.conf import settings
from django.db import models


class Member(models.Model):
    """Persistence model for members."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="member",
        null=True,
        blank=True,
    )
    username = models.CharField(max_length=150, unique=True)
    birth_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return self.username


class Address(models.Model):
    """Persistence model for addresses."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    street = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100)

    class Meta:
        ordering = ["country", "city", "street"]
        indexes = [
            models.Index(fields=["city", "country"], name="address_city_country_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.street}, {self.city} ({self.country})"


class Tag(models.Model):
    """Persistence model for tags."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Activity(models.Model):
    """Persistence model for activities."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField()
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    # Plain integers: updates are stored as submitted.
    num_places = models.IntegerField()
    age_limit = models.IntegerField(default=0)
    creator = models.ForeignKey(Member, on_delete=models.PROTECT, related_name="created_activities")
    address = models.ForeignKey(
        Address, on_delete=models.SET_NULL, related_name="+", null=True, blank=True
    )
    tags = models.ManyToManyField(Tag, related_name="+", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "start_time"]
        indexes = [
            models.Index(fields=["address", "date"], name="activity_address_date_idx"),
            models.Index(fields=["name", "date"], name="activity_name_date_idx"),
        ]
        verbose_name_plural = "activities"

    def __str__(self) -> str:
        return self.name


class Enrollment(models.Model):
    """A member's place on an activity, as participant or on the waiting list."""

    class Status(models.TextChoices):
        PARTICIPANT = "PARTICIPANT", "Participant"
        WAITLISTED = "WAITLISTED", "Waitlisted"

    activity = models.ForeignKey(Activity, on_delete=models.CASCADE, related_name="enrollments")
    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name="enrollments")
    status = models.CharField(max_length=16, choices=Status.choices)
    position = models.PositiveIntegerField()

    class Meta:
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["activity", "member"], name="unique_enrollment_per_member"),
        ]

    def __str__(self) -> str:
        return f"{self.member} - {self.activity} ({self.status})"


class Rating(models.Model):
    """Persistence model for ratings (opinions)."""

    activity = models.ForeignKey(Activity, on_delete=models.PROTECT, related_name="ratings")
    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name="ratings")
    rating = models.PositiveSmallIntegerField()
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["activity", "member"], name="unique_rating_per_member"),
        ]

    def __str__(self) -> str:
        return f"{self.member} - {self.activity}: {self.rating}"
