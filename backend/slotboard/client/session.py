"""
Credenziale locale del client: token + utente.

Va creata e passata esplicitamente a chi chiama l'API; niente stato globale.
Ciclo di vita: load() all'avvio, save() dopo il login, clear() al logout o
quando il server risponde 401.
"""
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, path: Path | str | None = None):
        # path None: sessione solo in memoria
        self.path = Path(path) if path else None
        self.token: str | None = None
        self.user: dict | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.get("isAdmin"))

    def load(self) -> "Session":
        if not self.path or not self.path.exists():
            return self
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return self
        if not isinstance(data, dict):
            logger.warning("Ignoring unreadable session file %s: not a JSON object", self.path)
            return self
        self.token = data.get("token")
        self.user = data.get("user")
        return self

    def save(self, token: str, user: dict) -> None:
        self.token = token
        self.user = user
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.path:
            self.path.unlink(missing_ok=True)
