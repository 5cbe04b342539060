import hireflow.scripts.ensure_tables as ensure_tables
import hireflow.scripts.migrate_db as migrate


class _Result:
    def __init__(self, rowcount):
        self.rowcount = rowcount


class _Conn:
    def __init__(self, fail_on=None):
        self.calls = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_on = fail_on

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, _sql, params):
        if params["legacy"] == self.fail_on:
            raise RuntimeError("locked")
        self.calls.append((params["legacy"], params["canonical"]))
        return _Result(2)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


def test_migrate_rewrites_each_legacy_status(monkeypatch):
    conn = _Conn()
    monkeypatch.setattr(migrate, "init_db", lambda: None)
    monkeypatch.setattr(migrate.engine, "connect", lambda: conn)

    assert migrate.main() == 6
    assert conn.calls == [
        ("screening", "shortlisted"),
        ("interview", "interview_scheduled"),
        ("offer", "offered"),
    ]
    assert conn.commits == 3


def test_migrate_skips_failed_statement(monkeypatch):
    conn = _Conn(fail_on="interview")
    monkeypatch.setattr(migrate, "init_db", lambda: None)
    monkeypatch.setattr(migrate.engine, "connect", lambda: conn)

    assert migrate.main() == 4
    assert conn.rollbacks == 1


def test_migrate_against_real_rows(monkeypatch, db_session, factory):
    employer = factory.employer()
    candidate = factory.candidate()
    legacy = factory.application(factory.job(employer), candidate, status="screening")
    engine = db_session.get_bind()
    monkeypatch.setattr(migrate, "init_db", lambda: None)
    monkeypatch.setattr(migrate, "engine", engine)

    assert migrate.main() == 1
    db_session.expire_all()
    assert db_session.get(type(legacy), legacy.id).status == "shortlisted"


def test_ensure_tables_prints_created(monkeypatch, capsys):
    monkeypatch.setattr(ensure_tables, "ensure_tables_exist", lambda: ["saved_jobs"])
    ensure_tables.main()
    out = capsys.readouterr().out
    assert "saved_jobs" in out
    assert "check complete" in out
