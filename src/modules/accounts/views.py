"""Account API views.

Exposes the ``AccountService`` via HTTP using DRF ViewSets.  Output is
rendered through ``ACCOUNT_POLICY``; domain exceptions are translated into
the standard error envelope.
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
from modules.accounts.filters import AccountFilter
from modules.accounts.models import Account
from modules.accounts.policy import ACCOUNT_POLICY
from modules.accounts.repositories.django_repository import AccountDjangoRepository
from modules.accounts.serializers import AccountSerializer
from modules.accounts.services import AccountService
from modules.core.exceptions import not_found_response, validation_error_response
from modules.core.validation import ValidationFailed
from modules.core.viewsets import PolicyViewSetMixin


class AccountViewSet(PolicyViewSetMixin, ListModelMixin, GenericViewSet):
    """ViewSet for Account list / retrieve / create / update.

    All ORM access goes through the service/repository layer.
    """

    policy = ACCOUNT_POLICY
    filterset_class = AccountFilter
    ordering_fields = ["id", "username"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    queryset = Account.objects.all()
    serializer_class = AccountSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = AccountService(repository=AccountDjangoRepository())

    def get_queryset(self):
        return self._service.list_accounts()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/accounts/{pk}/"""
        try:
            account = self._service.get_account(pk)
        except AccountNotFound as exc:
            return not_found_response(exc)
        return self.respond(account)

    def create(self, request: Request) -> Response:
        """POST /api/v1/accounts/"""
        error = self.payload_error(request.data)
        if error is not None:
            return error
        try:
            account = self._service.create_account(request.data)
        except ValidationFailed as exc:
            return validation_error_response(exc)
        return self.respond(account, status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/accounts/{pk}/"""
        error = self.payload_error(request.data)
        if error is not None:
            return error
        try:
            account = self._service.update_account(pk, request.data)
        except AccountNotFound as exc:
            return not_found_response(exc)
        except ValidationFailed as exc:
            return validation_error_response(exc)
        return self.respond(account)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/accounts/{pk}/"""
        return self.update(request, pk)
