"""
Client HTTP per l'API del calendario.

Le letture di slot e titoli passano dal RetryingFetch; le mutazioni no (un
errore torna subito al chiamante, che lo mostra come notifica).
"""
import logging
from datetime import date, datetime

import requests

from ..core.weeks import date_key
from .retry import CancelToken, RetryingFetch
from .session import Session

logger = logging.getLogger(__name__)


class LoginFailed(Exception):
    pass


class SlotBoardClient:
    def __init__(
        self,
        base_url: str,
        session: Session | None = None,
        http: requests.Session | None = None,
        retry: RetryingFetch | None = None,
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or Session()
        self.http = http or requests.Session()
        self.retry = retry or RetryingFetch(on_unauthorized=self.session.clear)
        self.timeout = timeout

    def _headers(self) -> dict:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs):
        r = self.http.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(),
            timeout=self.timeout,
            **kwargs,
        )
        r.raise_for_status()
        return r.json()

    # -----------------------------
    # AUTH
    # -----------------------------

    def login(self, username: str, password: str) -> dict:
        try:
            data = self._request("POST", "/api/auth/login", json={"username": username, "password": password})
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 401:
                raise LoginFailed("Invalid credentials") from e
            raise
        self.session.save(data["token"], data["user"])
        logger.info("Logged in as %s", data["user"].get("username"))
        return data["user"]

    def logout(self) -> None:
        self.session.clear()

    # -----------------------------
    # LETTURE (con retry)
    # -----------------------------

    def week_slots(
        self,
        day: date | datetime | str,
        token: CancelToken | None = None,
        admin: bool = False,
    ) -> list[dict]:
        path = f"/api/slots/week/{date_key(day)}"
        return self.retry(lambda: self._request("GET", path), token=token, admin=admin, label="week slots")

    def date_titles(self, token: CancelToken | None = None, admin: bool = False) -> dict[str, str]:
        rows = self.retry(
            lambda: self._request("GET", "/api/date-titles"), token=token, admin=admin, label="date titles"
        )
        return {row["date"]: row["title"] for row in rows}

    def deleted_dates(self) -> set[str]:
        return set(self._request("GET", "/api/deleted-dates"))

    # -----------------------------
    # MUTAZIONI (admin)
    # -----------------------------

    def toggle_slot(self, slot_id: int) -> dict:
        return self._request("PATCH", f"/api/slots/{slot_id}")

    def initialize_week(self, day: date | datetime | str) -> dict:
        return self._request("POST", "/api/slots/initialize", json={"startDate": date_key(day)})

    def save_date_title(self, day: date | datetime | str, title: str) -> dict:
        return self._request("POST", "/api/date-titles", json={"date": date_key(day), "title": title})

    def hide_date(self, day: date | datetime | str) -> dict:
        return self._request("POST", "/api/deleted-dates", json={"date": date_key(day)})

    def restore_date(self, day: date | datetime | str) -> dict:
        return self._request("DELETE", f"/api/deleted-dates/{date_key(day)}")
