from rxmanager.db.init_db import DEMO_MEDICINES, seed_medicines
from rxmanager.models import Medicine


def test_seed_is_idempotent(db):
    assert seed_medicines(db) == len(DEMO_MEDICINES)
    assert seed_medicines(db) == 0
    assert db.query(Medicine).count() == len(DEMO_MEDICINES)
