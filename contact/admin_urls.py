"""
Contact Admin URL Configuration

Contact management for the admin panel (bearer token required).
"""
from django.urls import path
from .views import (
    ContactListView,
    ContactHistoryView,
    ContactDetailView,
    ContactReplyView,
)

app_name = 'contact_admin'

urlpatterns = [
    path('contacts', ContactListView.as_view(), name='contact-list'),
    path('contacts/<int:id>', ContactDetailView.as_view(), name='contact-detail'),
    path('contacts/<int:id>/history', ContactHistoryView.as_view(), name='contact-history'),
    path('reply', ContactReplyView.as_view(), name='reply'),
]
