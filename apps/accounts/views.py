from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .context import CallerContext
from .permissions import IsStaffAccount, capability_required
from .serializers import UserLoginSerializer, UserSerializer, SellerBalanceSerializer
from .services import (
    authenticate_user,
    deactivate_seller,
    reset_seller_device,
    InvalidCredentialsError,
    InactiveAccountError,
    DeviceMismatchError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with username and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with username, password and (for POS terminals) a device id."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
            device=serializer.validated_data.get('device') or None,
        )
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except (InactiveAccountError, DeviceMismatchError) as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current user's profile and seller balances.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=None,
    responses={200: SellerBalanceSerializer},
    description="Deactivate a seller and push a forced logout to its clients.",
    tags=['accounts'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('update_seller')])
def deactivate(request, pk):
    """Deactivate a seller account."""
    caller = CallerContext.from_user(request.user)
    seller = deactivate_seller(seller_id=pk, provider_id=caller.tenant_scope)
    return Response(SellerBalanceSerializer(seller).data)


@extend_schema(
    request=None,
    responses={200: SellerBalanceSerializer},
    description="Clear a seller's bound login device.",
    tags=['accounts'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('update_seller')])
def reset_device(request, pk):
    """Unbind the seller's login device."""
    caller = CallerContext.from_user(request.user)
    seller = reset_seller_device(seller_id=pk, provider_id=caller.tenant_scope)
    return Response(SellerBalanceSerializer(seller).data)
