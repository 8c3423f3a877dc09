"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.properties import pricing
from shared.domain.errors import ValidationError

from . import services
from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    ArrivalsQuerySerializer,
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
    PriceCalculationSerializer,
    PriceQuoteSerializer,
)


class BookingViewSet(viewsets.ModelViewSet):
    """
    Bookings of one business.

    DELETE cancels instead of removing the row, so the history stays and the
    dates are released for new bookings.
    """

    queryset = Booking.objects.select_related("property", "property__business").all()
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["check_in", "check_out", "created_at", "customer_name"]
    ordering = ["-check_in", "-id"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action in {"update", "partial_update"}:
            return BookingUpdateSerializer
        if self.action == "cancel":
            return BookingCancelSerializer
        if self.action == "calculate_price":
            return PriceCalculationSerializer
        return BookingSerializer

    def list(self, request, *args, **kwargs):  # type: ignore
        if not request.query_params.get("business"):
            raise ValidationError("The business query parameter is required.", fields=["business"])
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        property_id = data.pop("property", None)
        property_ids = data.pop("property_ids", None)

        if property_ids:
            bookings = services.create_bookings(property_ids, services.BookingInput.from_mapping(data))
            read_serializer = BookingSerializer(bookings, many=True, context=self.get_serializer_context())
            return Response(read_serializer.data, status=status.HTTP_201_CREATED)

        booking = services.create_booking(services.BookingInput.from_mapping({**data, "property_id": property_id}))
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=kwargs.pop("partial", False))
        serializer.is_valid(raise_exception=True)
        changes = dict(serializer.validated_data)
        if "property" in changes:
            changes["property_id"] = changes.pop("property")
        booking = services.update_booking(instance.pk, changes)
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        booking = services.cancel_booking(self.get_object().pk)
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.cancel_booking(self.get_object().pk, serializer.validated_data["reason"])
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["post"], url_path="calculate-price")
    def calculate_price(self, request):  # type: ignore
        """Preview the price of a stay; uncovered nights come back as ``missing_dates``."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        quote = pricing.calculate_price(data["property"], data["check_in"], data["check_out"])
        return Response(PriceQuoteSerializer(quote).data)

    @action(detail=False, methods=["get"])
    def arrivals(self, request):  # type: ignore
        query = ArrivalsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        groups = services.arrivals(data["business"], data.get("start"), data.get("end"))
        context = self.get_serializer_context()
        return Response(
            [
                {
                    "date": day.isoformat(),
                    "bookings": BookingSerializer(bookings, many=True, context=context).data,
                }
                for day, bookings in groups
            ]
        )
