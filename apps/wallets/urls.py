from django.urls import path
from . import views

app_name = 'wallets'

urlpatterns = [
    # GET    /api/wallets/                  - List funding records
    # POST   /api/wallets/fund/             - Fund a seller
    # POST   /api/wallets/providers/fund/   - Top up a provider (admin)
    # POST   /api/wallets/reset-lock/       - Clear a stuck funding lock
    # DELETE /api/wallets/{id}/             - Reverse a funding
    path('', views.WalletTransactionListView.as_view(), name='list'),
    path('fund/', views.fund, name='fund'),
    path('providers/fund/', views.fund_provider_wallet, name='provider-fund'),
    path('reset-lock/', views.reset_lock, name='reset-lock'),
    path('<uuid:pk>/', views.reverse_transaction, name='reverse'),
]
