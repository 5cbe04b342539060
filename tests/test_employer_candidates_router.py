def _seed(factory):
    acme = factory.employer(company_name="Acme")
    globex = factory.employer(company_name="Globex")
    analyst = factory.job(acme, title="Analyst")
    engineer = factory.job(acme, title="Engineer")
    ann = factory.candidate(name="Ann")
    bob = factory.candidate(name="Bob")
    factory.profile(ann, headline="Analyst", experience_years=4)
    factory.skills(ann, "sql", "python")
    factory.application(analyst, ann, status="rejected")
    factory.application(engineer, ann, status="offer", step="Offer call")
    factory.application(factory.job(globex), bob, status="hired")
    return acme, globex, ann, bob


def test_list_candidates_for_employer(api, factory):
    acme, _, ann, _ = _seed(factory)
    resp = api.act_as(acme).get("/employer/candidates")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 1
    [summary] = data["candidates"]
    assert summary["id"] == ann.id
    assert summary["status"] == "interview"
    assert summary["skills"] == ["python", "sql"]
    assert summary["applied_jobs_count"] == 2
    assert summary["headline"] == "Analyst"


def test_list_candidates_bucket_filter(api, factory):
    acme, globex, _, bob = _seed(factory)
    client = api.act_as(acme)
    assert client.get("/employer/candidates", params={"status": "interview"}).json()["total"] == 1
    assert client.get("/employer/candidates", params={"status": "hired"}).json()["total"] == 0
    assert client.get("/employer/candidates", params={"status": "bogus"}).status_code == 422

    hired = api.act_as(globex).get("/employer/candidates", params={"status": "hired"}).json()
    assert [c["id"] for c in hired["candidates"]] == [bob.id]


def test_candidate_detail_is_scoped(api, factory):
    acme, _, ann, bob = _seed(factory)
    client = api.act_as(acme)

    detail = client.get(f"/employer/candidates/{ann.id}")
    assert detail.status_code == 200
    body = detail.json()
    assert body["user"]["name"] == "Ann"
    assert body["profile"]["experience_years"] == 4
    assert body["summary"]["status"] == "interview"
    assert {a["status"] for a in body["applications"]} == {"rejected", "offered"}

    assert client.get(f"/employer/candidates/{bob.id}").status_code == 404
    assert client.get("/employer/candidates/missing").status_code == 404


def test_pipeline_stage_filter(api, factory):
    acme, _, _, _ = _seed(factory)
    client = api.act_as(acme)

    everything = client.get("/employer/pipeline").json()
    assert everything["stage"] is None
    assert len(everything["items"]) == 2

    offers = client.get("/employer/pipeline", params={"stage": "offer call"}).json()
    assert offers["stage"] == "offer call"
    assert [a["step"] for a in offers["items"]] == ["Offer call"]


def test_candidates_require_employer(client):
    assert client.get("/employer/candidates").status_code == 403
    assert client.get("/employer/pipeline").status_code == 403
