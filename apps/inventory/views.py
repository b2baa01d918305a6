from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.context import CallerContext
from apps.accounts.permissions import IsStaffAccount, capability_required
from apps.core.exceptions import InvalidRequestError
from .serializers import ArchiveImportSerializer, ArchiveActiveSerializer, ArchiveSerializer
from .services import import_archive, set_archive_active, delete_archive


@extend_schema(
    request=ArchiveImportSerializer,
    responses={201: ArchiveSerializer},
    description="Import a batch of cards (code + serial rows) as a new archive.",
    tags=['inventory'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('create_archive')])
def archive_import(request):
    """Create an archive and its Ready stock units."""
    serializer = ArchiveImportSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    caller = CallerContext.from_user(request.user)
    provider_id = caller.tenant_scope or data.get('provider')
    if provider_id is None:
        raise InvalidRequestError("provider is required")

    archive = import_archive(
        provider_id=provider_id,
        plan_id=data['plan'],
        rows=data['rows'],
        note=data.get('note', ''),
    )
    return Response(ArchiveSerializer(archive).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=ArchiveActiveSerializer,
    responses={200: ArchiveSerializer},
    description="Enable or disable an archive batch.",
    tags=['inventory'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('archive_status')])
def archive_active(request, pk):
    """Toggle an archive's active flag."""
    serializer = ArchiveActiveSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    caller = CallerContext.from_user(request.user)
    archive = set_archive_active(
        archive_id=pk,
        active=serializer.validated_data['active'],
        provider_id=caller.tenant_scope,
    )
    return Response(ArchiveSerializer(archive).data)


@extend_schema(
    responses={204: None},
    description="Delete an archive and its stock while every card is still Ready.",
    tags=['inventory'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsStaffAccount, capability_required('delete_archive')])
def archive_delete(request, pk):
    """Delete an untouched archive."""
    caller = CallerContext.from_user(request.user)
    delete_archive(archive_id=pk, provider_id=caller.tenant_scope)
    return Response(status=status.HTTP_204_NO_CONTENT)
