from hireflow.models import UserSettings

DEFAULTS = {
    "job_alerts_email": True,
    "job_alerts_push": True,
    "activity_emails": True,
    "marketing_emails": False,
    "login_alerts": True,
    "two_factor": False,
    "theme": "system",
}


def test_first_read_persists_defaults(api, db_session, factory):
    user = factory.candidate()
    client = api.act_as(user)

    resp = client.get("/settings")
    assert resp.status_code == 200
    assert resp.json() == DEFAULTS
    assert db_session.query(UserSettings).filter_by(user_id=user.id).count() == 1

    client.get("/settings")
    assert db_session.query(UserSettings).count() == 1


def test_patch_is_partial_and_creates_row(api, db_session, factory):
    client = api.act_as(factory.employer())

    resp = client.patch("/settings", json={"marketing_emails": True, "theme": "dark"})
    assert resp.status_code == 200
    assert resp.json() == {**DEFAULTS, "marketing_emails": True, "theme": "dark"}

    again = client.patch("/settings", json={"two_factor": True, "theme": None})
    assert again.json() == {**DEFAULTS, "marketing_emails": True, "theme": "dark", "two_factor": True}
    assert client.get("/settings").json() == again.json()
    assert db_session.query(UserSettings).count() == 1


def test_patch_rejects_unknown_theme(api, factory):
    client = api.act_as(factory.candidate())
    assert client.patch("/settings", json={"theme": "neon"}).status_code == 422
    assert client.get("/settings").json()["theme"] == "system"


def test_settings_are_per_user(api, factory):
    first = factory.candidate()
    second = factory.candidate()
    api.act_as(first).patch("/settings", json={"job_alerts_push": False})
    assert api.act_as(second).get("/settings").json()["job_alerts_push"] is True


def test_settings_require_auth(api):
    assert api.get("/settings").status_code == 401
