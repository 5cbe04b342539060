from io import BytesIO

from hireflow.services.resume_ingestion import MAX_RESUME_BYTES


def test_profile_read_and_update(api, factory):
    client = api.act_as(factory.candidate())
    assert client.get("/profile").json() == {
        "headline": None,
        "location": None,
        "experience_years": None,
        "bio": None,
        "resume_url": None,
    }

    updated = client.put("/profile", json={"headline": "Data engineer", "experience_years": 3})
    assert updated.status_code == 200
    assert updated.json()["headline"] == "Data engineer"

    partial = client.put("/profile", json={"location": "Porto"}).json()
    assert partial["headline"] == "Data engineer"
    assert partial["location"] == "Porto"

    assert client.put("/profile", json={"experience_years": -1}).status_code == 422


def test_resume_upload_replaces_url(api, factory, blob_store):
    client = api.act_as(factory.candidate())
    assert client.get("/profile/resume").json() == {"resume_url": None}

    files = {"file": ("cv.docx", BytesIO(b"PK docx"), "application/vnd.openxmlformats-officedocument.wordprocessingml.document")}
    resp = client.post("/profile/resume", files=files)
    assert resp.status_code == 200
    url = resp.json()["resume_url"]
    assert url.endswith(".docx")
    assert blob_store.objects[url] == b"PK docx"
    assert client.get("/profile/resume").json()["resume_url"] == url


def test_resume_upload_rejects_wrong_type(api, factory, blob_store):
    client = api.act_as(factory.candidate())
    resp = client.post("/profile/resume", files={"file": ("cv.png", BytesIO(b"png"), "image/png")})
    assert resp.status_code == 400
    assert blob_store.objects == {}


def test_resume_upload_rejects_oversized_file(api, factory, blob_store):
    client = api.act_as(factory.candidate())
    big = BytesIO(b"a" * (MAX_RESUME_BYTES + 1))
    resp = client.post("/profile/resume", files={"file": ("cv.pdf", big, "application/pdf")})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "File too large. Max allowed is 5MB."
    assert blob_store.objects == {}


def test_skills_replace(api, factory):
    client = api.act_as(factory.candidate())
    assert client.get("/profile/skills").json() == {"skills": []}
    resp = client.put("/profile/skills", json={"skills": ["SQL", "sql", " dbt "]})
    assert resp.json() == {"skills": ["SQL", "dbt"]}
    assert client.get("/profile/skills").json() == {"skills": ["SQL", "dbt"]}


def test_profile_is_candidate_only(employer_client):
    assert employer_client.get("/profile").status_code == 403
