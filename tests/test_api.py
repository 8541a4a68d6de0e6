"""Tests for the read-only catalog API and the demo seed."""
from medcart import storage
from medcart.schemas import DrawerIn, MedicationIn
from medcart.seed import DRAWERS, ITEMS, seed_catalog


def _add_drawer(db, label="Oral", position=1):
    return storage.create_drawer(db, DrawerIn(label=label, position=position))


def _add_med(db, drawer_id, **fields):
    data = dict(name="Ondansetron", dosage="4 mg", form="Injection", route="IV",
                classification="Antiemetic", prep_method="syringe",
                prep_target_amount="2", prep_target_unit="mL")
    data.update(fields)
    return storage.create_medication(db, MedicationIn(drawer_id=drawer_id, **data))


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_drawers_listed_by_position(client, db_session):
    _add_drawer(db_session, "Second", 2)
    _add_drawer(db_session, "First", 1)
    r = client.get("/api/drawers")
    assert r.status_code == 200
    body = r.json()
    assert [d["label"] for d in body] == ["First", "Second"]
    assert body[0]["color"] == "#6B7280"
    assert body[0]["size"] == "standard"


def test_get_drawer_and_404(client, db_session):
    drawer = _add_drawer(db_session)
    assert client.get(f"/api/drawers/{drawer.id}").json()["label"] == "Oral"
    r = client.get("/api/drawers/nope")
    assert r.status_code == 404
    assert r.json() == {"detail": "Drawer not found"}


def test_medications_use_camel_case(client, db_session):
    drawer = _add_drawer(db_session)
    med = _add_med(db_session, drawer.id, storage_instructions="Room temperature")
    body = client.get(f"/api/medications/{med.id}").json()
    assert body["drawerId"] == drawer.id
    assert body["itemType"] == "medication"
    assert body["prepMethod"] == "syringe"
    assert body["prepTargetAmount"] == "2"
    assert body["storage"] == "Room temperature"
    assert body["controlledSubstance"] is False


def test_filter_by_drawer(client, db_session):
    a = _add_drawer(db_session, "A", 1)
    b = _add_drawer(db_session, "B", 2)
    _add_med(db_session, a.id, name="One")
    _add_med(db_session, b.id, name="Two")
    assert len(client.get("/api/medications").json()) == 2
    names = [m["name"] for m in client.get(f"/api/medications/drawer/{b.id}").json()]
    assert names == ["Two"]
    assert client.get("/api/medications/drawer/none").json() == []


def test_medication_404(client):
    r = client.get("/api/medications/missing")
    assert r.status_code == 404
    assert r.json()["detail"] == "Medication not found"


def test_preparation_target(client, db_session):
    drawer = _add_drawer(db_session)
    med = _add_med(db_session, drawer.id, prep_target_amount="2.5")
    body = client.get(f"/api/medications/{med.id}/preparation").json()
    assert body == {
        "targetAmount": 2.5, "unit": "mL", "method": "syringe",
        "maxAmount": 10.0, "stepSize": 0.5, "tabletCount": None,
    }


def test_preparation_unavailable_for_tools(client, db_session):
    drawer = _add_drawer(db_session)
    tool = _add_med(db_session, drawer.id, item_type="tool", prep_method=None)
    assert client.get(f"/api/medications/{tool.id}/preparation").status_code == 404


def test_preparation_with_bad_data_is_rejected(client, db_session):
    drawer = _add_drawer(db_session)
    med = _add_med(db_session, drawer.id, prep_target_amount="two")
    assert client.get(f"/api/medications/{med.id}/preparation").status_code == 422


def test_seed_is_idempotent(db_session):
    added = seed_catalog(db_session)
    assert added == sum(len(v) for v in ITEMS.values())
    assert storage.get_drawer_count(db_session) == len(DRAWERS)
    assert seed_catalog(db_session) == 0
    assert storage.get_drawer_count(db_session) == len(DRAWERS)


def test_seeded_prep_data_is_valid(db_session):
    from medcart.services.dosage import has_prep_data, interpret

    seed_catalog(db_session)
    meds = storage.get_all_medications(db_session)
    prepared = [m for m in meds if has_prep_data(m)]
    assert prepared
    for med in prepared:
        target = interpret(med)
        assert 0 <= target.target_amount <= target.max_amount


def test_placeholder_user(db_session):
    user = storage.create_user(db_session, "student", "placeholder")
    assert storage.get_user(db_session, user.id).username == "student"
    assert storage.get_user_by_username(db_session, "student").id == user.id
    assert storage.get_user_by_username(db_session, "nobody") is None
