"""
Shares Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("create", views.create_token_view),
    path("share", views.share_ownership_view),
    path("associate", views.associate_token_view),
    path("check", views.check_ownership_view),
    path("health", views.health_view),
]
