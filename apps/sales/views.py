from rest_framework import generics, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.context import CallerContext
from apps.accounts.permissions import IsSellerAccount, IsStaffAccount, capability_required
from apps.accounts.models import Seller
from apps.core.exceptions import AccountInactiveError, TenantMismatchError
from apps.inventory.services import hold_stock, list_provider_prices
from .serializers import (
    HoldRequestSerializer,
    HoldResponseSerializer,
    StaffHoldRequestSerializer,
    SettleRequestSerializer,
    StaffSettleRequestSerializer,
    ReceiptSerializer,
    ActivateRequestSerializer,
    PaymentSerializer,
    RefundResponseSerializer,
    CardSerializer,
)
from .services import settle_hold, refund_payment, list_seller_payments, mark_payment_activated


class PaymentPagination(PageNumberPagination):
    """Pagination for seller history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _check_seller_tenant(caller, seller_id):
    """Staff may only act for sellers of their own provider."""
    scope = caller.tenant_scope
    if scope is None:
        return
    provider_id = Seller.objects.filter(pk=seller_id).values_list('provider_id', flat=True).first()
    if provider_id is None:
        raise AccountInactiveError()
    if provider_id != scope:
        raise TenantMismatchError("You can only manage your own sellers")


# POS (seller) endpoints

@extend_schema(
    request=HoldRequestSerializer,
    responses={200: HoldResponseSerializer},
    description="Reserve one card of a price for the calling seller.",
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsSellerAccount])
def hold(request):
    """Hold a card; the token must be settled within HOLD_TTL."""
    serializer = HoldRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = hold_stock(
        seller_id=request.user.seller_id,
        price_id=serializer.validated_data['price_id'],
        quantity=serializer.validated_data['quantity'],
    )
    return Response(HoldResponseSerializer(result).data)


@extend_schema(
    request=SettleRequestSerializer,
    responses={201: ReceiptSerializer},
    description="Pay for a held card and receive its code.",
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsSellerAccount])
def settle(request):
    """Settle the caller's hold into a payment."""
    serializer = SettleRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    receipt = settle_hold(
        seller_id=request.user.seller_id,
        hold_token=serializer.validated_data['hold_token'],
        note=serializer.validated_data['note'],
    )
    return Response(ReceiptSerializer(receipt).data, status=status.HTTP_201_CREATED)


class CardListView(generics.ListAPIView):
    """Prices the calling seller can hold, from its own provider."""

    serializer_class = CardSerializer
    permission_classes = [IsAuthenticated, IsSellerAccount]
    pagination_class = None

    def get_queryset(self):
        return list_provider_prices(provider_id=self.request.user.seller.provider_id)


class PaymentHistoryView(generics.ListAPIView):
    """Calling seller's payments, newest first."""

    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated, IsSellerAccount]
    pagination_class = PaymentPagination

    def get_queryset(self):
        return list_seller_payments(seller_id=self.request.user.seller_id)


@extend_schema(
    request=ActivateRequestSerializer,
    responses={200: PaymentSerializer},
    description="Mark a sold card as activated on the customer's side.",
    tags=['pos'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsSellerAccount])
def activate(request, pk):
    serializer = ActivateRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    payment = mark_payment_activated(
        payment_id=pk,
        seller_id=request.user.seller_id,
        activated_by=serializer.validated_data['activated_by'],
    )
    return Response(PaymentSerializer(payment).data)


# Staff endpoints

@extend_schema(
    request=StaffHoldRequestSerializer,
    responses={200: HoldResponseSerializer},
    description="Reserve cards on behalf of a seller (bulk allowed).",
    tags=['staff'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('hold_cards')])
def staff_hold(request):
    serializer = StaffHoldRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    caller = CallerContext.from_user(request.user)
    _check_seller_tenant(caller, data['seller_id'])

    result = hold_stock(
        seller_id=data['seller_id'],
        price_id=data['price_id'],
        quantity=data['quantity'],
        bulk_allowed=True,
    )
    return Response(HoldResponseSerializer(result).data)


@extend_schema(
    request=StaffSettleRequestSerializer,
    responses={201: ReceiptSerializer},
    description="Settle a hold on behalf of a seller.",
    tags=['staff'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('hold_cards')])
def staff_settle(request):
    serializer = StaffSettleRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    caller = CallerContext.from_user(request.user)
    receipt = settle_hold(
        seller_id=data['seller_id'],
        hold_token=data['hold_token'],
        note=data['note'],
        provider_id=caller.tenant_scope,
    )
    return Response(ReceiptSerializer(receipt).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: RefundResponseSerializer},
    description="Refund a payment: the seller is credited and the cards go back to Ready.",
    tags=['staff'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('refund_payment')])
def staff_refund(request, pk):
    caller = CallerContext.from_user(request.user)
    result = refund_payment(payment_id=pk, provider_id=caller.tenant_scope)
    return Response(RefundResponseSerializer(result).data)
