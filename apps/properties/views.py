"""Property API views."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from . import services
from .availability import blocked_days, disabled_checkout_dates, disabled_dates
from .filters import BlockedDateFilterSet, PriceRangeFilterSet, PropertyFilterSet
from .models import BlockedDate, PriceRange, Property
from .serializers import (
    ApplyPriceRangeSerializer,
    BlockedDateSerializer,
    BlockedDateUpdateSerializer,
    BlockedDateWriteSerializer,
    BulkDeleteSerializer,
    DisabledDatesQuerySerializer,
    PriceRangeSerializer,
    PriceRangeUpdateSerializer,
    PriceRangeWriteSerializer,
    PropertySerializer,
    PropertyWriteSerializer,
)


class PropertyViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Properties are listed per business and never deleted through the API."""

    queryset = Property.objects.select_related("business").all()
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PropertyFilterSet
    ordering_fields = ["name", "created_at"]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return PropertyWriteSerializer
        return PropertySerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        property_obj = serializer.save()
        read_serializer = PropertySerializer(property_obj, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        property_obj = serializer.save()
        return Response(PropertySerializer(property_obj, context=self.get_serializer_context()).data)


class PropertyCalendarMixin:
    """
    Optional ``property_id`` URL scope for calendar resources.

    The same viewset serves ``/blocked-dates/`` and
    ``/properties/<property_id>/blocked-dates/``; on the nested route the
    queryset and new records are limited to that property.
    """

    property_lookup_url_kwarg = "property_id"
    property_object: Property | None = None

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        property_id = kwargs.get(self.property_lookup_url_kwarg)
        if property_id is not None:
            self.property_object = get_object_or_404(Property, pk=property_id)

    def get_property(self) -> Property | None:
        return self.property_object

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.property_object is not None:
            qs = qs.filter(property=self.property_object)
        return qs


class BlockedDateViewSet(PropertyCalendarMixin, viewsets.ModelViewSet):
    """Blocked dates; one create call may block several properties at once."""

    queryset = BlockedDate.objects.select_related("property").all()
    serializer_class = BlockedDateSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = BlockedDateFilterSet

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BlockedDateWriteSerializer
        if self.action in {"update", "partial_update"}:
            return BlockedDateUpdateSerializer
        if self.action == "bulk_delete":
            return BulkDeleteSerializer
        return BlockedDateSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        property_obj = self.get_property()
        property_ids = [property_obj.pk] if property_obj is not None else data.get("property_ids", [])
        created = services.create_blocked_dates(
            property_ids,
            data["start_date"],
            data["end_date"],
            data.get("reason", ""),
        )
        read_serializer = BlockedDateSerializer(created, many=True, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=kwargs.pop("partial", False))
        serializer.is_valid(raise_exception=True)
        blocked = services.update_blocked_date(instance.pk, **serializer.validated_data)
        return Response(BlockedDateSerializer(blocked, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_blocked_date(self.get_object().pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request, property_id=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        scope = self.get_property()
        deleted = services.bulk_delete_blocked_dates(
            serializer.validated_data["ids"],
            property_id=scope.pk if scope is not None else None,
        )
        return Response({"deleted": deleted}, status=status.HTTP_200_OK)


class PriceRangeViewSet(PropertyCalendarMixin, viewsets.ModelViewSet):
    """Nightly prices by date range."""

    queryset = PriceRange.objects.select_related("property").all()
    serializer_class = PriceRangeSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = PriceRangeFilterSet

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return PriceRangeWriteSerializer
        if self.action in {"update", "partial_update"}:
            return PriceRangeUpdateSerializer
        if self.action == "apply_to_business":
            return ApplyPriceRangeSerializer
        if self.action == "bulk_delete":
            return BulkDeleteSerializer
        return PriceRangeSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        property_obj = self.get_property()
        price_range = services.create_price_range(
            property_obj if property_obj is not None else data.get("property"),
            data["date_from"],
            data["date_to"],
            data["price_per_night"],
        )
        read_serializer = PriceRangeSerializer(price_range, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=kwargs.pop("partial", False))
        serializer.is_valid(raise_exception=True)
        price_range = services.update_price_range(instance.pk, **serializer.validated_data)
        return Response(PriceRangeSerializer(price_range, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_price_range(self.get_object().pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["post"], url_path="apply-to-business")
    def apply_to_business(self, request, property_id=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        created = services.apply_price_range_to_business(
            data["business"],
            data["date_from"],
            data["date_to"],
            data["price_per_night"],
        )
        read_serializer = PriceRangeSerializer(created, many=True, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request, property_id=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        scope = self.get_property()
        deleted = services.bulk_delete_price_ranges(
            serializer.validated_data["ids"],
            property_id=scope.pk if scope is not None else None,
        )
        return Response({"deleted": deleted}, status=status.HTTP_200_OK)


class DisabledDatesView(APIView):
    """
    Days the booking calendar greys out for the selected properties.

    With ``start`` the response also lists checkout days that would make a
    stay from ``start`` run across a disabled day.
    """

    def get(self, request):  # type: ignore
        params = request.query_params
        serializer = DisabledDatesQuerySerializer(
            data={
                key: value
                for key, value in {
                    "property": params.getlist("property"),
                    "start": params.get("start"),
                    "exclude_booking": params.get("exclude_booking"),
                    "exclude_blocked": params.get("exclude_blocked"),
                    "include_blocks": params.get("include_blocks"),
                }.items()
                if value not in (None, "", [])
            }
        )
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        days = disabled_dates(
            data["property"],
            exclude_booking_id=data.get("exclude_booking"),
            exclude_blocked_id=data.get("exclude_blocked"),
            include_blocks=data["include_blocks"],
        )
        payload = {"disabled_dates": [day.isoformat() for day in days]}
        if data.get("start"):
            blocked = (
                blocked_days(data["property"], exclude_blocked_id=data.get("exclude_blocked"))
                if data["include_blocks"]
                else []
            )
            payload["disabled_checkout_dates"] = [
                day.isoformat() for day in disabled_checkout_dates(data["start"], days, blocked=blocked)
            ]
        return Response(payload)
