# backend/businesses/urls.py
from django.urls import path

from .views import BusinessIntakeView, BusinessPublicView, BusinessEditView

urlpatterns = [
    path("", BusinessIntakeView.as_view(), name="business-intake"),
    path("<slug:slug>/", BusinessPublicView.as_view(), name="business-public"),
    path("<slug:slug>/edit/", BusinessEditView.as_view(), name="business-edit"),
]
