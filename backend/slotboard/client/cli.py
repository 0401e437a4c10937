"""
Uso:
  slotboard login admin
  slotboard week 2024-06-09
  slotboard toggle 12
  slotboard init 2024-06-09
  slotboard title 2024-06-09 "Open day"
  slotboard hide 2024-06-16 / slotboard restore 2024-06-16
"""
import argparse
import getpass
import logging
import sys
from datetime import date

import requests

from ..core.weeks import next_sunday, parse_date_key, upcoming_sundays
from .api import LoginFailed, SlotBoardClient
from .config import ClientSettings
from .retry import RetryExhausted, RetryingFetch
from .session import Session
from .views import AdminView, PublicView

logger = logging.getLogger(__name__)


def _date_arg(value: str) -> date:
    try:
        return parse_date_key(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slotboard", description="Sunday slot board client")
    parser.add_argument("--api", help="API base URL (default: SLOTBOARD_API_URL)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Log in and store the token")
    p.add_argument("username")
    p.add_argument("--password")

    sub.add_parser("logout", help="Forget the stored token")

    p = sub.add_parser("week", help="Show the slots of a Sunday")
    p.add_argument("date", nargs="?", type=_date_arg)

    sub.add_parser("dates", help="List upcoming Sundays with titles")

    p = sub.add_parser("toggle", help="Toggle slot availability (admin)")
    p.add_argument("slot_id", type=int)

    p = sub.add_parser("init", help="Create the slots of a week (admin)")
    p.add_argument("date", type=_date_arg)

    p = sub.add_parser("title", help="Set the title of a date (admin)")
    p.add_argument("date", type=_date_arg)
    p.add_argument("title")

    p = sub.add_parser("hide", help="Hide a date from the calendar (admin)")
    p.add_argument("date", type=_date_arg)

    p = sub.add_parser("restore", help="Restore a hidden date (admin)")
    p.add_argument("date", type=_date_arg)

    return parser


def _client(args, cfg: ClientSettings) -> SlotBoardClient:
    session = Session(cfg.SESSION_FILE).load()
    retry = RetryingFetch(cfg.MAX_ATTEMPTS, cfg.BASE_DELAY, on_unauthorized=session.clear)
    return SlotBoardClient(args.api or cfg.API_URL, session=session, retry=retry, timeout=cfg.TIMEOUT)


def _report(view: AdminView) -> int:
    if view.needs_login:
        print("Session expired: run 'slotboard login <username>'", file=sys.stderr)
        return 1
    n = view.notification
    if n.open:
        print(n.message, file=sys.stderr if n.severity == "error" else sys.stdout)
    return 1 if n.severity == "error" else 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    cfg = ClientSettings()
    client = _client(args, cfg)

    if args.command == "login":
        password = args.password or getpass.getpass()
        try:
            user = client.login(args.username, password)
        except LoginFailed:
            print("Invalid credentials", file=sys.stderr)
            return 1
        print(f"Logged in as {user['username']}{' (admin)' if user.get('isAdmin') else ''}")
        return 0

    if args.command == "logout":
        client.logout()
        return 0

    try:
        if args.command == "week":
            admin = client.session.is_admin
            view = (AdminView if admin else PublicView)(client, weeks_ahead=cfg.WEEKS_AHEAD)
            view.refresh_titles()
            view.select(args.date or next_sunday(date.today()))
            if admin and view.needs_login:
                return _report(view)
            if view.error:
                print(f"Failed to load slots: {view.error}", file=sys.stderr)
                return 1
            print(view.render())
            return 0

        if args.command == "dates":
            titles = client.date_titles()
            hidden = client.deleted_dates()
            days = set(upcoming_sundays(date.today(), cfg.WEEKS_AHEAD))
            days.update(parse_date_key(h) for h in hidden)
            for d in sorted(days):
                key = d.isoformat()
                flag = " [hidden]" if key in hidden else ""
                print(f"{key}{flag}  {titles.get(key, '')}".rstrip())
            return 0

        if not client.session.is_authenticated:
            print("Not logged in: run 'slotboard login <username>'", file=sys.stderr)
            return 1

        if args.command == "toggle":
            slot = client.toggle_slot(args.slot_id)
            state = "Available" if slot["isAvailable"] else "Unavailable"
            print(f"Slot #{slot['id']} {slot['date']} -> {state}")
            return 0

        if args.command == "init":
            result = client.initialize_week(args.date)
            print(f"Week {result['week']}: {result['created']} created, {result['skipped']} skipped")
            return 0

        view = AdminView(client, weeks_ahead=cfg.WEEKS_AHEAD)
        if args.command == "title":
            view.save_title(args.date, args.title)
        elif args.command == "hide":
            view.hide(args.date)
        elif args.command == "restore":
            view.restore(args.date)
        return _report(view)

    except RetryExhausted as e:
        print(f"Failed to load: {e}", file=sys.stderr)
        return 1
    except requests.HTTPError as e:
        if e.response is not None and e.response.status_code == 401:
            client.logout()
            print("Session expired: run 'slotboard login <username>'", file=sys.stderr)
        else:
            print(f"Request failed: {e}", file=sys.stderr)
        return 1
    except requests.RequestException as e:
        logger.debug("Request failed", exc_info=True)
        print(f"Request failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
