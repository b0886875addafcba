from django.urls import path

from stimulus_site import views

urlpatterns = [
    path("", views.newsletter, name="newsletter"),
]
