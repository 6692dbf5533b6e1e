# backend/styles/urls.py
from django.urls import path

from .views import (
    ThemeCatalogView, FilterCatalogView, ShadowCatalogView, PatternCatalogView,
    StylePreviewView, CustomCSSValidateView,
)

urlpatterns = [
    path("themes/", ThemeCatalogView.as_view(), name="style-themes"),
    path("filters/", FilterCatalogView.as_view(), name="style-filters"),
    path("shadows/", ShadowCatalogView.as_view(), name="style-shadows"),
    path("patterns/", PatternCatalogView.as_view(), name="style-patterns"),
    path("preview/", StylePreviewView.as_view(), name="style-preview"),
    path("custom-css/validate/", CustomCSSValidateView.as_view(), name="custom-css-validate"),
]
