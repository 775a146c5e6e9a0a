from django.urls import path
from . import views

app_name = 'pipelines'

urlpatterns = [
    path('pipelines', views.pipeline_list_view, name='pipeline_list'),
    path('pipelines/<uuid:pk>', views.pipeline_detail_view, name='pipeline_detail'),
    path('pipelines/<uuid:pk>/stages', views.pipeline_stages_view, name='pipeline_stages'),
    path('pipelines/<uuid:pk>/cards', views.pipeline_cards_view, name='pipeline_cards'),
    path('pipelines/<uuid:pk>/cards/<uuid:card_id>', views.card_detail_view, name='card_detail'),
]
