from django.urls import path
from . import views

urlpatterns = [
    path("",                          views.QueueListCreateView.as_view(),  name="queue-list"),
    path("<uuid:entry_id>/",          views.QueueEntryDetailView.as_view(), name="queue-detail"),
    path("<uuid:entry_id>/dock/",     views.AssignDockView.as_view(),       name="queue-dock"),
    path("<uuid:entry_id>/start/",    views.StartUnloadingView.as_view(),   name="queue-start"),
    path("<uuid:entry_id>/finish/",   views.FinishUnloadingView.as_view(),  name="queue-finish"),
]
