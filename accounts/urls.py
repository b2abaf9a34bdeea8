from django.urls import path

from .views import AdminLoginView

app_name = 'accounts'

urlpatterns = [
    path('login', AdminLoginView.as_view(), name='login'),
]
