from django.urls import path
from .views import ShipmentListCreateView, ShipmentDetailView, WeightCalculateView

urlpatterns = [
    path("shipments/",               ShipmentListCreateView.as_view(), name="shipment-list"),
    path("shipments/<uuid:pk>/",     ShipmentDetailView.as_view(),     name="shipment-detail"),
    path("weights/calculate/",       WeightCalculateView.as_view(),    name="weight-calculate"),
]
