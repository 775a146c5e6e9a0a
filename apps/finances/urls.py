from django.urls import path
from . import views

app_name = 'finances'

urlpatterns = [
    path('finances/salaries', views.salary_list_view, name='salary_list'),
    path('finances/salaries/<int:pk>', views.salary_detail_view, name='salary_detail'),
    path('finances/fixed', views.fixed_expense_list_view, name='fixed_expense_list'),
    path('finances/fixed/<int:pk>', views.fixed_expense_detail_view, name='fixed_expense_detail'),
    path('finances/expenses', views.expense_list_view, name='expense_list'),
    path('finances/expenses/<int:pk>', views.expense_detail_view, name='expense_detail'),
    path('finances/incomes', views.income_list_view, name='income_list'),
    path('finances/incomes/<int:pk>', views.income_detail_view, name='income_detail'),
    path('finances/settings', views.settings_view, name='settings'),
]
