from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [

    path('auth/login', views.login_view, name='login'),
    path('auth/logout', views.logout_view, name='logout'),
]
