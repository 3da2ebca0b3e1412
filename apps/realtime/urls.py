from django.urls import path
from . import views

urlpatterns = [
    path("realtime/token/", views.RealtimeTokenView.as_view(), name="realtime-token"),
    path("config/",         views.ClientConfigView.as_view(),  name="client-config"),
]
