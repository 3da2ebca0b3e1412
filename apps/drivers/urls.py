from django.urls import path
from .views import (
    DriverListCreateView, DriverDetailView, WaypointListView,
    LocationCreateView, LocationHistoryView,
)

urlpatterns = [
    path("drivers/",                 DriverListCreateView.as_view(), name="driver-list"),
    path("drivers/<str:tax_id>/",    DriverDetailView.as_view(),     name="driver-detail"),
    path("waypoints/",               WaypointListView.as_view(),     name="waypoint-list"),
    path("locations/",               LocationCreateView.as_view(),   name="location-create"),
    path("locations/<str:driver>/",  LocationHistoryView.as_view(),  name="location-history"),
]
