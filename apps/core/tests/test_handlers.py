"""Tests for error rendering and hold tokens."""

import re

from rest_framework import status
from rest_framework.exceptions import ValidationError, NotAuthenticated

from apps.core.exceptions import (
    InsufficientBalanceError,
    HoldExpiredError,
    TransactionInProgressError,
    PosError,
)
from apps.core.handlers import pos_exception_handler
from apps.core.tokens import generate_hold_token


class TestPosExceptionHandler:

    def test_balance_error_carries_wallet_amount(self):
        response = pos_exception_handler(InsufficientBalanceError(wallet_amount=100), {})

        assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
        assert response.data == {
            'error': 'insufficient_balance',
            'detail': 'Your wallet is not enough.',
            'wallet_amount': 100,
        }

    def test_error_without_balance_omits_wallet_amount(self):
        response = pos_exception_handler(HoldExpiredError(), {})

        assert response.status_code == status.HTTP_410_GONE
        assert response.data['error'] == 'hold_expired'
        assert 'wallet_amount' not in response.data

    def test_custom_detail_is_kept(self):
        response = pos_exception_handler(TransactionInProgressError("Seller is busy"), {})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['detail'] == 'Seller is busy'

    def test_zero_wallet_amount_is_rendered(self):
        response = pos_exception_handler(InsufficientBalanceError(wallet_amount=0), {})
        assert response.data['wallet_amount'] == 0

    def test_validation_errors_are_invalid_requests(self):
        response = pos_exception_handler(ValidationError({'price_id': ['required']}), {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'invalid_request'
        assert response.data['detail'] == 'Invalid request.'
        assert response.data['fields'] == {'price_id': ['required']}

    def test_auth_errors_keep_default_rendering(self):
        response = pos_exception_handler(NotAuthenticated(), {})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' not in response.data

    def test_unknown_errors_become_generic_500(self):
        response = pos_exception_handler(RuntimeError('connection string leaked'), {'view': None})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'internal_error', 'detail': 'Internal server error.'}

    def test_kind_matches_default_code(self):
        assert PosError().kind == 'pos_error'
        assert HoldExpiredError().kind == 'hold_expired'


class TestHoldToken:

    def test_token_shape(self):
        assert re.fullmatch(r'[0-9a-f]{8}-[0-9a-f]{8}', generate_hold_token())

    def test_tokens_are_unique(self):
        tokens = {generate_hold_token() for _ in range(500)}
        assert len(tokens) == 500
