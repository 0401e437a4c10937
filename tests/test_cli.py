import pytest

from slotboard import init_admin
from slotboard.client import cli
from slotboard.client.api import SlotBoardClient
from slotboard.services.credentials import authenticate


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path, transport):
    monkeypatch.setenv("SLOTBOARD_SESSION_FILE", str(tmp_path / "session.json"))
    monkeypatch.setenv("SLOTBOARD_BASE_DELAY", "0")
    monkeypatch.setattr(
        cli,
        "SlotBoardClient",
        lambda base_url, **kw: SlotBoardClient("http://testserver", http=transport, **kw),
    )


def test_login_week_and_title(admin, capsys):
    assert cli.main(["login", "admin", "--password", "admin123"]) == 0
    assert "Logged in as admin (admin)" in capsys.readouterr().out

    assert cli.main(["title", "2024-06-09", "Open day"]) == 0
    assert "Date title saved" in capsys.readouterr().out

    assert cli.main(["week", "2024-06-12"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Sunday, June 9, 2024 - Open day")
    assert out.count("Available") == 32


def test_toggle_and_visibility(admin, api, capsys):
    slot_id = api.get("/api/slots/week/2024-06-09").json()[0]["id"]
    cli.main(["login", "admin", "--password", "admin123"])
    capsys.readouterr()

    assert cli.main(["toggle", str(slot_id)]) == 0
    assert "Unavailable" in capsys.readouterr().out

    assert cli.main(["hide", "2024-06-16"]) == 0
    assert cli.main(["hide", "2024-06-16"]) == 1
    assert cli.main(["restore", "2024-06-16"]) == 0


def test_bad_login(admin, capsys):
    assert cli.main(["login", "admin", "--password", "nope"]) == 1
    assert "Invalid credentials" in capsys.readouterr().err


def test_mutations_need_login(capsys, db):
    assert cli.main(["toggle", "1"]) == 1
    assert "Not logged in" in capsys.readouterr().err


def test_logout_forgets_token(admin, capsys):
    cli.main(["login", "admin", "--password", "admin123"])
    assert cli.main(["logout"]) == 0
    assert cli.main(["hide", "2024-06-16"]) == 1


def test_invalid_date_argument():
    with pytest.raises(SystemExit):
        cli.main(["week", "not-a-date"])


def test_init_admin_script(db):
    assert init_admin.main(["--username", "root", "--password", "s3cret"]) == 0
    token, user = authenticate(db, "root", "s3cret")
    assert user.is_admin is True


def test_init_week(admin, capsys):
    cli.main(["login", "admin", "--password", "admin123"])
    capsys.readouterr()

    assert cli.main(["init", "2024-06-12"]) == 0
    assert "Week 2024-06-09: 32 created, 0 skipped" in capsys.readouterr().out

    assert cli.main(["init", "2024-06-09"]) == 0
    assert "Week 2024-06-09: 0 created, 32 skipped" in capsys.readouterr().out


def test_init_week_requires_admin(member, capsys):
    cli.main(["login", "visitor", "--password", "visitor123"])
    capsys.readouterr()

    assert cli.main(["init", "2024-06-09"]) == 1
    assert "403" in capsys.readouterr().err
