#!/usr/bin/env python3
"""
Crea (o ricrea) l'account admin.

    slotboard-init-admin --username admin
Password da --password, da ADMIN_PASSWORD oppure chiesta a terminale.
"""
import argparse
import getpass
import logging
import sys

from .config import settings
from .database import Base, SessionLocal, engine
from .models import date_title, deleted_date, slot, user  # noqa: F401
from .services.credentials import create_admin

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the bootstrap admin account")
    parser.add_argument("--username", default=settings.ADMIN_USERNAME)
    parser.add_argument("--password", default=settings.ADMIN_PASSWORD)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    password = args.password or getpass.getpass("Admin password: ")
    if not password:
        logger.error("Empty password, aborting")
        return 1

    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        admin = create_admin(db, args.username, password)
        logger.info("Admin user '%s' created (id=%s)", admin.username, admin.id)
        return 0
    except Exception:
        db.rollback()
        logger.exception("Error creating admin user")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
