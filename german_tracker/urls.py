from django.urls import include, path, re_path

from tracker.views import spa_fallback

urlpatterns = [
    path("api/", include("tracker.urls")),
    re_path(r"^(?!api(?:/|$))(?P<path>.*)$", spa_fallback, name="spa"),
]
