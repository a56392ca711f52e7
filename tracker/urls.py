from django.urls import path
from .views import SessionDiscardView, SessionStartView, SessionStopView, StatsView

urlpatterns = [
    path("sessions/start", SessionStartView.as_view(), name="session-start"),
    path("sessions/stop/<str:session_id>", SessionStopView.as_view(), name="session-stop"),
    path("sessions/<str:session_id>", SessionDiscardView.as_view(), name="session-discard"),
    path("stats", StatsView.as_view(), name="stats"),
]
