from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),
    path('me/', views.get_current_user, name='current-user'),

    # Seller administration
    path('sellers/<uuid:pk>/deactivate/', views.deactivate, name='seller-deactivate'),
    path('sellers/<uuid:pk>/reset-device/', views.reset_device, name='seller-reset-device'),
]
