from django.urls import path
from .views import (
    ZoneListCreateView, ZoneDetailView,
    ClientRateListCreateView, ClientRateDetailView, RateCalculateView,
)

urlpatterns = [
    path("zones/",                  ZoneListCreateView.as_view(),       name="zone-list"),
    path("zones/<int:pk>/",         ZoneDetailView.as_view(),           name="zone-detail"),
    path("client-rates/",           ClientRateListCreateView.as_view(), name="client-rate-list"),
    path("client-rates/<int:pk>/",  ClientRateDetailView.as_view(),     name="client-rate-detail"),
    path("rates/calculate/",        RateCalculateView.as_view(),        name="rate-calculate"),
]
