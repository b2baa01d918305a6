from django.urls import path
from . import views

app_name = 'sales'

urlpatterns = [
    # GET  /api/pos/cards/                    - Prices the seller can hold
    # POST /api/pos/hold/                     - Reserve a card
    # POST /api/pos/settle/                   - Pay for a held card
    # GET  /api/pos/history/                  - Seller payment history
    # POST /api/pos/payments/{id}/activate/   - Set activation marker
    path('cards/', views.CardListView.as_view(), name='cards'),
    path('hold/', views.hold, name='hold'),
    path('settle/', views.settle, name='settle'),
    path('history/', views.PaymentHistoryView.as_view(), name='history'),
    path('payments/<uuid:pk>/activate/', views.activate, name='payment-activate'),
]
