from rest_framework import generics, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.context import CallerContext
from apps.accounts.permissions import IsAdminAccount, IsStaffAccount, capability_required
from apps.core.exceptions import InvalidRequestError
from .models import TransactionSource
from .serializers import (
    FundRequestSerializer,
    FundResponseSerializer,
    ResetLockRequestSerializer,
    WalletTransactionSerializer,
    WalletTransactionFilterSerializer,
    BalancesSerializer,
    ProviderFundRequestSerializer,
    ProviderFundResponseSerializer,
)
from .services import (
    fund_seller,
    fund_provider,
    reverse_wallet_transaction,
    reset_funding_lock,
    list_wallet_transactions,
)


class WalletTransactionPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    request=FundRequestSerializer,
    responses={201: FundResponseSerializer},
    description="Credit a seller's wallet. Returns 409 while another funding is in flight.",
    tags=['wallets'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('create_seller_wallet')])
def fund(request):
    """Fund a seller from the provider's balance (or as admin)."""
    serializer = FundRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    caller = CallerContext.from_user(request.user)
    if data['source'] == TransactionSource.ADMIN and not caller.is_admin:
        raise InvalidRequestError("Only admins can fund from the admin source")

    result = fund_seller(
        seller_id=data['seller_id'],
        amount=data['amount'],
        source=data['source'],
        provider_id=caller.tenant_scope,
        note=data['note'],
        date=data.get('date'),
    )
    return Response(FundResponseSerializer(result).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=ProviderFundRequestSerializer,
    responses={201: ProviderFundResponseSerializer},
    description="Top up a provider's wallet.",
    tags=['wallets'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminAccount, capability_required('create_provider_wallet')])
def fund_provider_wallet(request):
    serializer = ProviderFundRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = fund_provider(
        provider_id=data['provider_id'],
        amount=data['amount'],
        note=data['note'],
        date=data.get('date'),
    )
    return Response(ProviderFundResponseSerializer(result).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: BalancesSerializer},
    description="Reverse a funding: the seller is debited and the provider re-credited.",
    tags=['wallets'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('delete_seller_wallet')])
def reverse_transaction(request, pk):
    caller = CallerContext.from_user(request.user)
    result = reverse_wallet_transaction(transaction_id=pk, provider_id=caller.tenant_scope)
    return Response(BalancesSerializer(result).data)


@extend_schema(
    request=ResetLockRequestSerializer,
    responses={200: None},
    description="Force-clear a seller's stuck funding lock.",
    tags=['wallets'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('reset_seller_hold')])
def reset_lock(request):
    serializer = ResetLockRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    caller = CallerContext.from_user(request.user)
    reset_funding_lock(
        seller_id=serializer.validated_data['seller_id'],
        provider_id=caller.tenant_scope,
    )
    return Response({'detail': 'Funding lock reset'})


class WalletTransactionListView(generics.ListAPIView):
    """Funding records of the caller's provider (all providers for admins)."""

    serializer_class = WalletTransactionSerializer
    permission_classes = [IsAuthenticated, IsStaffAccount, capability_required('read_seller_wallet')]
    pagination_class = WalletTransactionPagination

    def get_queryset(self):
        filters = WalletTransactionFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)

        caller = CallerContext.from_user(self.request.user)
        return list_wallet_transactions(
            provider_id=caller.tenant_scope,
            seller_id=filters.validated_data.get('seller'),
        )
