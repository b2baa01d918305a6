from django.urls import path
from . import views

app_name = 'inventory'

urlpatterns = [
    # POST   /api/inventory/archives/               - Import a batch
    # POST   /api/inventory/archives/{id}/active/   - Enable/disable a batch
    # DELETE /api/inventory/archives/{id}/          - Delete an untouched batch
    path('archives/', views.archive_import, name='archive-import'),
    path('archives/<uuid:pk>/active/', views.archive_active, name='archive-active'),
    path('archives/<uuid:pk>/', views.archive_delete, name='archive-delete'),
]
