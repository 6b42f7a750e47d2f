"""
Reset every stored collection to the demo seed set.

    python -m schooldb.scripts.seed_demo            # reset
    python -m schooldb.scripts.seed_demo --dry-run  # show what is stored
"""

from __future__ import annotations

import argparse

from sqlalchemy.orm import Session

from schooldb.database import Base, SessionLocal, engine
from schooldb.apps.accounts import services as account_services
from schooldb.apps.inventory import services as inventory_services
from schooldb.apps.requisitions import services as requisition_services
from schooldb.apps.storage import services as storage_services


def describe(db: Session) -> str:
    return (
        f"users={len(account_services.list_users(db))} "
        f"items={len(inventory_services.list_items(db))} "
        f"requisitions={len(requisition_services.list_requisitions(db))}"
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Reset stored collections to seed data.")
    parser.add_argument("--dry-run", action="store_true", help="report current contents only")
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if args.dry_run:
            print("Current:", describe(db))
            return
        storage_services.reset_to_seed(db)
        db.commit()
        print("Seeded:", describe(db))
    finally:
        db.close()


if __name__ == "__main__":
    main()
