from datetime import date

import pytest

from slotboard.client.render import format_day, format_time, render_week
from slotboard.client.session import Session


def test_session_lifecycle(tmp_path):
    path = tmp_path / "nested" / "session.json"
    session = Session(path)
    assert session.load().is_authenticated is False

    session.save("tok", {"id": 1, "username": "admin", "isAdmin": True})
    assert path.exists()

    restored = Session(path).load()
    assert restored.token == "tok"
    assert restored.is_admin is True

    restored.clear()
    assert not path.exists()
    assert restored.token is None
    assert Session(path).load().is_authenticated is False
    # clear su file già rimosso
    restored.clear()


def test_unreadable_session_is_ignored(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    assert Session(path).load().is_authenticated is False


@pytest.mark.parametrize("content", ["[]", '"tok"', "null", "42"])
def test_session_file_that_is_not_an_object_is_ignored(tmp_path, content):
    path = tmp_path / "session.json"
    path.write_text(content, encoding="utf-8")
    session = Session(path).load()
    assert session.is_authenticated is False
    assert session.user is None

    # il login successivo ripara il file
    session.save("tok", {"id": 1, "username": "admin", "isAdmin": True})
    assert Session(path).load().token == "tok"


def test_memory_session():
    session = Session()
    session.save("tok", {"username": "visitor", "isAdmin": False})
    assert session.is_authenticated
    assert not session.is_admin
    session.clear()
    assert not session.is_authenticated


def test_format_helpers():
    assert format_time(10, 0) == "10:00"
    assert format_time(17, 3) == "17:45"
    assert format_day(date(2024, 6, 9)) == "Sunday, June 9, 2024"


def test_render_week():
    slots = [
        {"id": 1, "hour": 10, "slotNumber": 0, "isAvailable": True},
        {"id": 2, "hour": 10, "slotNumber": 1, "isAvailable": False},
    ]
    out = render_week(date(2024, 6, 9), slots, "Open day").splitlines()
    assert out[0] == "Sunday, June 9, 2024 - Open day"
    assert "10:00 Available" in out[2]
    assert "10:15 Unavailable" in out[2]
    assert "#2" in out[2]


def test_render_empty_week():
    assert render_week(date(2024, 6, 9), []).endswith("(no slots)")
