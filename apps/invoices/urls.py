from django.urls import path
from . import views

app_name = 'invoices'

urlpatterns = [
    path('invoices', views.invoice_list_view, name='invoice_list'),
    path('invoices/export', views.invoice_export_view, name='invoice_export'),
    path('invoices/<int:pk>', views.invoice_detail_view, name='invoice_detail'),
]
