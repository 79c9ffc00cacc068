# rxmanager/db/init_db.py
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rxmanager.db.base import Base
from rxmanager.db.session import SessionLocal, engine
from rxmanager.models import Medicine  # noqa: F401  (registers all tables)

logger = logging.getLogger(__name__)

DEMO_MEDICINES = [
    ("Paracetamol", "500 mg", "tablet", "GSK"),
    ("Amoxicillin", "250 mg", "capsule", "Cipla"),
    ("Cetirizine", "10 mg", "tablet", "Dr. Reddy's"),
    ("Ambroxol", "5 ml", "syrup", "Sun Pharma"),
    ("Insulin Glargine", "10 units", "injection", "Sanofi"),
    ("Clotrimazole", "1%", "cream", "Bayer"),
]


def create_tables() -> None:
    Base.metadata.create_all(bind=engine)


def seed_medicines(db: Session) -> int:
    """
    Insert demo medicines that are not present yet (matched by name).
    Safe to run multiple times.
    """
    have = {name for (name, ) in db.query(Medicine.name).all()}
    added = 0
    for name, dosage, typ, maker in DEMO_MEDICINES:
        if name in have:
            continue
        db.add(
            Medicine(name=name, dosage=dosage, type=typ, manufacturer=maker))
        added += 1
    db.commit()
    return added


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Create Prescription Manager tables")
    parser.add_argument("--seed",
                        action="store_true",
                        help="insert a small demo medicine catalog")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    try:
        create_tables()
    except SQLAlchemyError:
        logger.exception("Table creation failed")
        raise
    logger.info("Tables ready: %s", sorted(Base.metadata.tables))

    if args.seed:
        db = SessionLocal()
        try:
            logger.info("Seeded %s medicines", seed_medicines(db))
        finally:
            db.close()


if __name__ == "__main__":
    main()
