"""Listing API views.

Exposes the ``ListingService`` via HTTP using DRF ViewSets.  Collections
render the ``read`` view, single items and write responses the
``item-read`` view.  Domain exceptions are translated into the standard
error envelope; generic exceptions are never swallowed.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.exceptions import AccountNotFound
from modules.accounts.repositories.django_repository import AccountDjangoRepository
from modules.core.exceptions import not_found_response, validation_error_response
from modules.core.validation import ValidationFailed
from modules.core.viewsets import PolicyViewSetMixin
from modules.listings.exceptions import ListingNotFound
from modules.listings.filters import ListingFilter
from modules.listings.models import Listing
from modules.listings.policy import LISTING_POLICY
from modules.listings.repositories.django_repository import ListingDjangoRepository
from modules.listings.serializers import ListingSerializer
from modules.listings.services import ListingService


class ListingViewSet(PolicyViewSetMixin, ListModelMixin, GenericViewSet):
    """ViewSet for Listing list / retrieve / create / update.

    All ORM access goes through the service/repository layer.
    """

    policy = LISTING_POLICY
    filterset_class = ListingFilter
    ordering_fields = ["id", "price", "title"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    queryset = Listing.objects.all()
    serializer_class = ListingSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ListingService(
            repository=ListingDjangoRepository(),
            account_repository=AccountDjangoRepository(),
        )

    def get_queryset(self):
        return self._service.list_listings()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/listings/{pk}/"""
        try:
            listing = self._service.get_listing(pk)
        except ListingNotFound as exc:
            return not_found_response(exc)
        return self.respond(listing)

    def create(self, request: Request) -> Response:
        """POST /api/v1/listings/"""
        error = self.payload_error(request.data)
        if error is not None:
            return error
        try:
            listing = self._service.create_listing(request.data)
        except ValidationFailed as exc:
            return validation_error_response(exc)
        except AccountNotFound as exc:
            return not_found_response(exc)
        return self.respond(listing, status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/listings/{pk}/"""
        error = self.payload_error(request.data)
        if error is not None:
            return error
        try:
            listing = self._service.update_listing(pk, request.data)
        except (ListingNotFound, AccountNotFound) as exc:
            return not_found_response(exc)
        except ValidationFailed as exc:
            return validation_error_response(exc)
        return self.respond(listing)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/listings/{pk}/"""
        return self.update(request, pk)
