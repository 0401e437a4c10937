"""
Stato delle due viste del calendario (pubblica e admin), senza UI.

Ogni selezione di una domenica annulla la catena di retry precedente; una
risposta arrivata dopo una nuova selezione (o dopo close()) viene scartata.
"""
import logging
from datetime import date, datetime

import requests

from ..core.weeks import date_key, next_sunday, shift_week, sunday_of_week, upcoming_sundays
from .api import SlotBoardClient
from .render import render_week
from .retry import CancelToken, FetchCancelled, ReauthRequired, RetryExhausted

logger = logging.getLogger(__name__)


class Notification:
    def __init__(self):
        self.open = False
        self.message = ""
        self.severity = "success"

    def show(self, message: str, severity: str = "success") -> None:
        self.open = True
        self.message = message
        self.severity = severity

    def dismiss(self) -> None:
        self.open = False


class PublicView:
    admin = False

    def __init__(self, client: SlotBoardClient, today: date | None = None, weeks_ahead: int = 8):
        self.client = client
        self.today = today or date.today()
        self.weeks_ahead = weeks_ahead

        self.current: date | None = None
        self.slots: list[dict] = []
        self.titles: dict[str, str] = {}
        self.hidden: set[str] = set()
        self.loading = False
        self.error: Exception | None = None
        self.closed = False

        self._token: CancelToken | None = None
        self._generation = 0

    # -----------------------------
    # lifecycle
    # -----------------------------

    def open(self) -> None:
        self.refresh_titles()
        self.refresh_hidden()
        sundays = self.sundays()
        if sundays:
            self.select(sundays[0])

    def close(self) -> None:
        self.closed = True
        self._generation += 1
        if self._token:
            self._token.cancel()

    # -----------------------------
    # dati
    # -----------------------------

    def sundays(self) -> list[date]:
        return [d for d in upcoming_sundays(self.today, self.weeks_ahead) if d.isoformat() not in self.hidden]

    def refresh_titles(self) -> None:
        try:
            self.titles = self.client.date_titles(admin=self.admin)
        except (RetryExhausted, requests.HTTPError) as e:
            # i titoli sono accessori: la griglia resta utilizzabile
            logger.error("Error fetching date titles: %s", e)
        except ReauthRequired:
            self._reauth()

    def refresh_hidden(self) -> None:
        try:
            self.hidden = self.client.deleted_dates()
        except requests.RequestException as e:
            logger.error("Error fetching deleted dates: %s", e)

    def select(self, day: date | datetime | str) -> None:
        if self.closed:
            return
        if self._token:
            self._token.cancel()
        token = self._token = CancelToken()
        self._generation += 1
        generation = self._generation

        self.current = sunday_of_week(day)
        self.loading = True
        self.error = None

        try:
            slots = self.client.week_slots(self.current, token=token, admin=self.admin)
        except FetchCancelled:
            return
        except ReauthRequired:
            if generation == self._generation:
                self.loading = False
                self._reauth()
            return
        except (RetryExhausted, requests.HTTPError) as e:
            # backoff esaurito o errore non transitorio: errore persistente
            if generation == self._generation:
                self.loading = False
                self.error = e
            return

        if generation != self._generation:
            logger.debug("Discarding stale slots for %s", date_key(day))
            return
        self.slots = slots
        self.loading = False

    def retry(self) -> None:
        if self.current:
            self.select(self.current)

    # -----------------------------
    # navigazione
    # -----------------------------

    @property
    def can_go_back(self) -> bool:
        return self.current is not None and self.current > next_sunday(self.today)

    def previous_week(self) -> None:
        if self.can_go_back:
            self.select(shift_week(self.current, -1))

    def next_week(self) -> None:
        if self.current:
            self.select(shift_week(self.current, 1))

    def render(self) -> str:
        if self.current is None:
            return "No Sundays available."
        if self.loading:
            return "Loading slots..."
        if self.error:
            return f"Error: {self.error}"
        return render_week(self.current, self.slots, self.titles.get(self.current.isoformat()))

    def _reauth(self) -> None:
        # nella vista pubblica un 401 non interrompe nulla
        pass


class AdminView(PublicView):
    admin = True

    def __init__(self, client: SlotBoardClient, today: date | None = None, weeks_ahead: int = 8):
        super().__init__(client, today=today, weeks_ahead=weeks_ahead)
        self.notification = Notification()
        self.needs_login = False

    def open(self) -> None:
        if not self.client.session.is_authenticated:
            self.needs_login = True
            return
        super().open()

    def sundays(self) -> list[date]:
        # l'admin vede anche le date nascoste, per poterle ripristinare
        return upcoming_sundays(self.today, self.weeks_ahead)

    def _reauth(self) -> None:
        self.client.logout()
        self.needs_login = True
        self.close()

    def _failed(self, e: requests.RequestException, message: str) -> None:
        resp = getattr(e, "response", None)
        if resp is not None and resp.status_code == 401:
            self._reauth()
            return
        logger.error("%s: %s", message, e)
        self.notification.show(message, "error")

    # -----------------------------
    # mutazioni
    # -----------------------------

    def toggle(self, slot_id: int) -> None:
        idx = next((i for i, s in enumerate(self.slots) if s["id"] == slot_id), None)
        if idx is None:
            self.notification.show("Slot not found", "error")
            return

        before = self.slots[idx]
        # aggiornamento ottimistico, poi vale il record del server
        self.slots[idx] = {**before, "isAvailable": not before["isAvailable"]}
        try:
            updated = self.client.toggle_slot(slot_id)
        except requests.RequestException as e:
            self.slots[idx] = before
            self._failed(e, "Error updating slot availability")
            return
        self.slots[idx] = updated
        self.notification.show("Slot availability updated successfully")

    def save_title(self, day: date | datetime | str, title: str) -> None:
        try:
            rec = self.client.save_date_title(day, title)
        except requests.RequestException as e:
            self._failed(e, "Error saving date title")
            return
        self.titles[rec["date"]] = rec["title"]
        self.notification.show("Date title saved")

    def hide(self, day: date | datetime | str) -> None:
        try:
            rec = self.client.hide_date(day)
        except requests.RequestException as e:
            self._failed(e, "Error deleting date")
            return
        self.hidden.add(rec["date"])
        self.notification.show("Date deleted")

    def restore(self, day: date | datetime | str) -> None:
        try:
            self.client.restore_date(day)
        except requests.RequestException as e:
            self._failed(e, "Error restoring date")
            return
        self.hidden.discard(date_key(day))
        self.notification.show("Date restored successfully")
