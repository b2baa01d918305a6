from django.urls import path
from . import views

app_name = 'staff'

urlpatterns = [
    # POST   /api/staff/hold/                   - Bulk hold for a seller
    # POST   /api/staff/settle/                 - Settle a hold for a seller
    # DELETE /api/staff/payments/{id}/refund/   - Refund a payment
    path('hold/', views.staff_hold, name='hold'),
    path('settle/', views.staff_settle, name='settle'),
    path('payments/<uuid:pk>/refund/', views.staff_refund, name='payment-refund'),
]
