from django.urls import path
from .views import BillListView, BillDetailView, BillGenerateView, BillPreviewView, MonthlyBillRunView

urlpatterns = [
    path("",              BillListView.as_view(),       name="bill-list"),
    path("generate/",     BillGenerateView.as_view(),   name="bill-generate"),
    path("preview/",      BillPreviewView.as_view(),    name="bill-preview"),
    path("monthly-run/",  MonthlyBillRunView.as_view(), name="bill-monthly-run"),
    path("<int:pk>/",     BillDetailView.as_view(),     name="bill-detail"),
]
