from django.urls import path
from .views import (
    ClientListCreateView, ClientDetailView,
    VendorListCreateView, VendorDetailView,
    VendorPincodeView, VendorPincodeDeleteView, ValidatePincodeView,
)

urlpatterns = [
    path("clients/",                               ClientListCreateView.as_view(),    name="client-list"),
    path("clients/<uuid:pk>/",                     ClientDetailView.as_view(),        name="client-detail"),
    path("vendors/",                               VendorListCreateView.as_view(),    name="vendor-list"),
    path("vendors/<uuid:pk>/",                     VendorDetailView.as_view(),        name="vendor-detail"),
    path("vendors/<uuid:vendor_id>/pincodes/",     VendorPincodeView.as_view(),       name="vendor-pincodes"),
    path("vendors/<uuid:vendor_id>/pincodes/<str:pincode>/",
                                                   VendorPincodeDeleteView.as_view(), name="vendor-pincode-delete"),
    path("validate-pincode/<uuid:vendor_id>/<str:pincode>/",
                                                   ValidatePincodeView.as_view(),     name="validate-pincode"),
]
