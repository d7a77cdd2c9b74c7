"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map service outcomes to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.serializers import Serializer
from rest_framework.views import APIView

from activities.domain import Member, Outcome, OutcomeKind
from activities.handlers.serializers import (
    ActivityProposalSerializer,
    ActivitySearchSerializer,
    ActivitySerializer,
    AddressInputSerializer,
    AddressSerializer,
    MemberSerializer,
    RatingInputSerializer,
    RatingSerializer,
    TagInputSerializer,
    TagNamesSerializer,
    TagSerializer,
)
from activities.wiring import get_services

STATUS_BY_KIND = {
    OutcomeKind.OK: status.HTTP_200_OK,
    OutcomeKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    OutcomeKind.CONFLICT: status.HTTP_409_CONFLICT,
    OutcomeKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    OutcomeKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def outcome_response(
    outcome: Outcome,
    serializer_class: type[Serializer] | None = None,
    success_status: int = status.HTTP_200_OK,
) -> Response:
    """Render an outcome: the serialized payload, or a code and message."""
    if not outcome.ok:
        return Response(
            {"code": outcome.code.value, "message": outcome.message},
            status=STATUS_BY_KIND[outcome.kind],
        )
    if serializer_class is None or outcome.payload is None:
        return Response({"message": outcome.message}, status=success_status)
    many = isinstance(outcome.payload, list)
    return Response(serializer_class(outcome.payload, many=many).data, status=success_status)


class MemberAPIView(APIView):
    """Base view resolving the authenticated user to a member identity."""

    permission_classes = [IsAuthenticated]

    def get_identity(self, request: Request) -> Member:
        member = get_services().members.get_member_by_username(request.user.get_username())
        if member is None:
            raise PermissionDenied("No member profile for this user.")
        return member


class ActivityListView(MemberAPIView):
    """Handler for GET/POST /api/activities"""

    def get(self, request: Request) -> Response:
        query = ActivitySearchSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        service = get_services().activities
        if query.has_criteria():
            params = query.validated_data
            outcome = service.search(
                tag=params.get("tag"),
                city=params.get("city"),
                country=params.get("country"),
                name=params.get("name"),
                on_date=params.get("date"),
            )
        elif query.validated_data["upcoming"]:
            outcome = service.list_upcoming()
        else:
            outcome = service.list_activities()
        return outcome_response(outcome, ActivitySerializer)

    def post(self, request: Request) -> Response:
        body = ActivityProposalSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        outcome = get_services().activities.create_activity(self.get_identity(request), body.to_proposal())
        return outcome_response(outcome, ActivitySerializer, success_status=status.HTTP_201_CREATED)


class ActivityDetailView(MemberAPIView):
    """Handler for GET/PUT/DELETE /api/activities/{activity_id}"""

    def get(self, request: Request, activity_id: str) -> Response:
        return outcome_response(get_services().activities.get_activity(activity_id), ActivitySerializer)

    def put(self, request: Request, activity_id: str) -> Response:
        body = ActivityProposalSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        outcome = get_services().activities.update_activity(
            self.get_identity(request), activity_id, body.to_proposal()
        )
        return outcome_response(outcome, ActivitySerializer)

    def delete(self, request: Request, activity_id: str) -> Response:
        outcome = get_services().activities.delete_activity(self.get_identity(request), activity_id)
        return outcome_response(outcome)


class ActivityAddressView(MemberAPIView):
    """Handler for PUT /api/activities/{activity_id}/address/{address_id}"""

    def put(self, request: Request, activity_id: str, address_id: str) -> Response:
        outcome = get_services().activities.attach_address(self.get_identity(request), activity_id, address_id)
        return outcome_response(outcome, ActivitySerializer)


class ActivityTagsView(MemberAPIView):
    """Handler for POST /api/activities/{activity_id}/tags"""

    def post(self, request: Request, activity_id: str) -> Response:
        body = TagNamesSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        outcome = get_services().activities.add_tags(
            self.get_identity(request), activity_id, body.validated_data["names"]
        )
        return outcome_response(outcome, ActivitySerializer)


class ParticipantListView(MemberAPIView):
    """Handler for POST /api/activities/{activity_id}/participants"""

    def post(self, request: Request, activity_id: str) -> Response:
        outcome = get_services().activities.enroll(self.get_identity(request), activity_id)
        return outcome_response(outcome)


class ParticipantDetailView(MemberAPIView):
    """Handler for DELETE /api/activities/{activity_id}/participants/{member_id}"""

    def delete(self, request: Request, activity_id: str, member_id: str) -> Response:
        outcome = get_services().activities.remove_participant(self.get_identity(request), activity_id, member_id)
        return outcome_response(outcome)


class WaitlistPromotionView(MemberAPIView):
    """Handler for POST /api/activities/{activity_id}/waitlist/promote"""

    def post(self, request: Request, activity_id: str) -> Response:
        outcome = get_services().activities.promote_from_waitlist(self.get_identity(request), activity_id)
        return outcome_response(outcome, MemberSerializer)


class RatingListView(MemberAPIView):
    """Handler for GET/POST/DELETE /api/activities/{activity_id}/ratings"""

    def get(self, request: Request, activity_id: str) -> Response:
        return outcome_response(get_services().ratings.list_for_activity(activity_id), RatingSerializer)

    def post(self, request: Request, activity_id: str) -> Response:
        body = RatingInputSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        outcome = get_services().ratings.add_rating(
            self.get_identity(request),
            activity_id,
            body.validated_data["rating"],
            body.validated_data["comment"],
        )
        return outcome_response(outcome, RatingSerializer, success_status=status.HTTP_201_CREATED)

    def delete(self, request: Request, activity_id: str) -> Response:
        outcome = get_services().ratings.delete_rating(self.get_identity(request), activity_id)
        return outcome_response(outcome)


class TagListView(MemberAPIView):
    """Handler for GET/POST /api/tags"""

    def get(self, request: Request) -> Response:
        return outcome_response(get_services().catalog.list_tags(), TagSerializer)

    def post(self, request: Request) -> Response:
        body = TagInputSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        outcome = get_services().catalog.create_tag(body.validated_data["name"])
        return outcome_response(outcome, TagSerializer, success_status=status.HTTP_201_CREATED)


class TagDetailView(MemberAPIView):
    """Handler for DELETE /api/tags/{tag_id}"""

    def delete(self, request: Request, tag_id: str) -> Response:
        return outcome_response(get_services().catalog.delete_tag(tag_id))


class AddressListView(MemberAPIView):
    """Handler for GET/POST /api/addresses"""

    def get(self, request: Request) -> Response:
        return outcome_response(get_services().catalog.list_addresses(), AddressSerializer)

    def post(self, request: Request) -> Response:
        body = AddressInputSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        outcome = get_services().catalog.create_address(**body.validated_data)
        return outcome_response(outcome, AddressSerializer, success_status=status.HTTP_201_CREATED)


class AddressDetailView(MemberAPIView):
    """Handler for DELETE /api/addresses/{address_id}"""

    def delete(self, request: Request, address_id: str) -> Response:
        return outcome_response(get_services().catalog.delete_address(address_id))
