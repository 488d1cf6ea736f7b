"""
URL configuration for the action endpoint.
"""

from django.urls import path

from api.v1.actions import views

urlpatterns = [
    path("", views.ActionView.as_view(), name="actions"),
]
