"""Tests for archive import, status and deletion (service and API)."""

import pytest
from django.urls import reverse
from rest_framework import status

from apps.core.exceptions import InvalidRequestError, NotFoundError, TenantMismatchError
from apps.inventory.models import Archive, StockUnit, StockStatus
from apps.inventory.services import delete_archive, import_archive, set_archive_active


@pytest.mark.django_db
class TestImportArchive:

    def test_import_creates_ready_units(self, provider, plan):
        archive = import_archive(
            provider_id=provider.pk,
            plan_id=plan.pk,
            rows=[{'code': ' AAA-1 ', 'serial': '1'}, {'code': 'AAA-2'}],
            note='June batch',
        )

        units = StockUnit.objects.filter(archive=archive).order_by('code')
        assert [u.code for u in units] == ['AAA-1', 'AAA-2']
        assert {u.status for u in units} == {StockStatus.READY}
        assert {u.seller_id for u in units} == {None}

    def test_empty_import(self, provider, plan):
        with pytest.raises(InvalidRequestError):
            import_archive(provider_id=provider.pk, plan_id=plan.pk, rows=[])

    def test_row_without_code(self, provider, plan):
        with pytest.raises(InvalidRequestError):
            import_archive(provider_id=provider.pk, plan_id=plan.pk, rows=[{'code': 'A'}, {'code': ''}])

        assert not Archive.objects.exists()

    def test_unknown_plan(self, provider):
        with pytest.raises(NotFoundError):
            import_archive(
                provider_id=provider.pk,
                plan_id='00000000-0000-0000-0000-000000000000',
                rows=[{'code': 'A'}],
            )


@pytest.mark.django_db
class TestArchiveStatus:

    def test_disable(self, archive, provider):
        set_archive_active(archive_id=archive.pk, active=False, provider_id=provider.pk)

        archive.refresh_from_db()
        assert archive.active is False

    def test_other_provider_cannot_toggle(self, archive, other_provider):
        with pytest.raises(TenantMismatchError):
            set_archive_active(archive_id=archive.pk, active=False, provider_id=other_provider.pk)


@pytest.mark.django_db
class TestDeleteArchive:

    def test_delete_untouched_archive(self, archive, make_units):
        make_units(3)

        delete_archive(archive_id=archive.pk)

        assert not Archive.objects.filter(pk=archive.pk).exists()
        assert not StockUnit.objects.exists()

    def test_refuse_when_a_unit_was_sold(self, archive, make_units):
        units = make_units(2)
        StockUnit.objects.filter(pk=units[0].pk).update(status=StockStatus.SOLD)

        with pytest.raises(InvalidRequestError):
            delete_archive(archive_id=archive.pk)

        archive.refresh_from_db()
        assert archive.active is True
        assert StockUnit.objects.filter(archive=archive).count() == 2

    def test_unknown_archive(self, db):
        with pytest.raises(NotFoundError):
            delete_archive(archive_id='00000000-0000-0000-0000-000000000000')


@pytest.mark.django_db
class TestArchiveApi:
    """Tests for /api/inventory/archives/"""

    def test_provider_imports_into_own_tenant(self, provider_client, provider, other_provider, plan):
        url = reverse('inventory:archive-import')
        data = {
            'provider': str(other_provider.pk),
            'plan': str(plan.pk),
            'rows': [{'code': 'NEW-1', 'serial': 'S1'}],
        }
        response = provider_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['total'] == 1
        assert response.data['ready'] == 1
        assert str(response.data['provider']) == str(provider.pk)

    def test_admin_must_name_provider(self, admin_client_jwt, plan):
        url = reverse('inventory:archive-import')
        response = admin_client_jwt.post(
            url, {'plan': str(plan.pk), 'rows': [{'code': 'A'}]}, format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'invalid_request'

    def test_delete_with_held_unit_is_refused(self, provider_client, archive, unit):
        StockUnit.objects.filter(pk=unit.pk).update(status=StockStatus.HOLD)
        url = reverse('inventory:archive-delete', args=[archive.pk])

        response = provider_client.delete(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Archive.objects.filter(pk=archive.pk).exists()

    def test_delete(self, provider_client, archive, unit):
        url = reverse('inventory:archive-delete', args=[archive.pk])

        response = provider_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_foreign_archive_toggle(self, provider_client, other_provider, plan):
        foreign = Archive.objects.create(provider=other_provider, plan=plan)
        url = reverse('inventory:archive-active', args=[foreign.pk])

        response = provider_client.post(url, {'active': False}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'tenant_mismatch'

    def test_seller_cannot_import(self, seller_client, plan):
        url = reverse('inventory:archive-import')
        response = seller_client.post(url, {'plan': str(plan.pk), 'rows': [{'code': 'A'}]}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
