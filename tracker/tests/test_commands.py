# tracker/tests/test_commands.py
import datetime as dt
from io import StringIO

import pytest
from django.core.management import call_command

from german_tracker.wsgi import application
from tracker.models import StudySession

T0 = dt.datetime(2025, 10, 27, 9, 0, 0, tzinfo=dt.timezone.utc)


def _closed(sid, level, seconds):
    StudySession.objects.create(
        id=sid, level=level, started_at=T0,
        ended_at=T0 + dt.timedelta(seconds=seconds), duration_seconds=seconds,
    )


@pytest.fixture
def served(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "tracker.management.commands.runtracker.serve",
        lambda app, **kw: calls.append((app, kw)),
    )
    return calls


@pytest.mark.django_db
def test_progress_prints_each_level_and_combined_total():
    _closed("a", "B1_PLUS", 50 * 3600)
    _closed("b", "B2", 330 * 3600)
    out = StringIO()
    call_command("progress", stdout=out)
    lines = out.getvalue().splitlines()

    assert lines == [
        "B1+: 50.0h / 200h (25.0% complete, 150.0h remaining)",
        "B2: 330.0h / 320h (100.0% complete, goal reached)",
        "Combined Total: 380.0h / 520h (73.1% complete, 140.0h remaining)",
    ]


@pytest.mark.django_db
def test_progress_with_no_sessions():
    out = StringIO()
    call_command("progress", stdout=out)
    assert out.getvalue().splitlines()[-1] == "Combined Total: 0.0h / 520h (0.0% complete, 520.0h remaining)"


@pytest.mark.django_db(transaction=True)
def test_runtracker_migrate_only_does_not_serve(caplog, served):
    with caplog.at_level("INFO"):
        call_command("runtracker", "--migrate-only", verbosity=0)
    assert "Database ready" in caplog.text
    assert served == []


@pytest.mark.django_db(transaction=True)
def test_runtracker_serves_on_configured_host_and_port(caplog, served, settings):
    settings.TRACKER_HOST = "127.0.0.1"
    settings.TRACKER_PORT = 8123
    with caplog.at_level("INFO"):
        call_command("runtracker", verbosity=0)

    assert served == [(application, {"host": "127.0.0.1", "port": 8123})]
    assert "Database ready" in caplog.text
    assert "Listening on http://127.0.0.1:8123" in caplog.text


@pytest.mark.django_db(transaction=True)
def test_runtracker_host_and_port_options(served):
    call_command("runtracker", "--host", "0.0.0.0", "--port", "9000", verbosity=0)
    assert served[0][1] == {"host": "0.0.0.0", "port": 9000}
