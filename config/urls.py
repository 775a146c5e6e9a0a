from django.urls import path, include

# Main URL Configuration
# Every app mounts its JSON endpoints under /api/

urlpatterns = [

    path('api/', include('apps.core.urls')),
    path('api/', include('apps.accounts.urls')),
    path('api/', include('apps.contacts.urls')),
    path('api/', include('apps.leads.urls')),
    path('api/', include('apps.pipelines.urls')),
    path('api/', include('apps.invoices.urls')),
    path('api/', include('apps.finances.urls')),

]

# Errors are rendered as JSON, never as HTML pages
handler404 = 'apps.core.views.not_found_view'
handler500 = 'apps.core.views.server_error_view'
