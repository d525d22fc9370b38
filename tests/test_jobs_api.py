"""
Integration tests for job management, the public apply flow and the admin views.
"""
import pytest

from app.db.models.application import Application
from app.db.models.job import Job
from conftest import TestSessionLocal, analysis_reply

JD_TEXT = b"We need a Python engineer with FastAPI, SQL and Kubernetes experience."
RESUME_TEXT = b"Jane Doe - Python engineer. Built FastAPI services backed by PostgreSQL."


def create_job(client, admin_headers, title="Backend Engineer", jd=JD_TEXT, filename="backend.txt"):
    return client.post(
        "/admin/jobs",
        data={"title": title, "description": "Platform team"},
        files={"jd_file": (filename, jd, "text/plain")},
        headers=admin_headers,
    )


def apply(client, job_id, name="Jane Doe", content=RESUME_TEXT, filename="jane.txt"):
    return client.post(
        f"/jobs/{job_id}/apply",
        data={"full_name": name},
        files={"resume": (filename, content, "text/plain")},
    )


@pytest.fixture
def job(client, admin_headers):
    response = create_job(client, admin_headers)
    assert response.status_code == 201
    return response.json()


def test_create_job_stores_jd(client, admin_headers, storage):
    response = create_job(client, admin_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Backend Engineer"
    assert data["jd_file_name"] == "backend.txt"
    assert data["jd_file_url"].startswith("http://testserver/storage/job-descriptions/")

    key = data["jd_file_url"].rsplit("/", 1)[-1]
    assert storage.read("job-descriptions", key) == JD_TEXT


def test_create_job_rejects_unsupported_jd(client, admin_headers):
    response = create_job(client, admin_headers, filename="backend.doc")
    assert response.status_code == 400
    assert "DOC files are not supported" in response.json()["detail"]


def test_public_job_listing(client, admin_headers):
    create_job(client, admin_headers, title="First")
    create_job(client, admin_headers, title="Second")

    response = client.get("/jobs")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [job["title"] for job in data["jobs"]] == ["Second", "First"]


def test_get_unknown_job(client):
    assert client.get("/jobs/999").status_code == 404


def test_apply_runs_analysis_and_stores_result(client, job, fake_llm, storage):
    fake_llm.content = analysis_reply(score=88, verdict="High", matched=["Python", "FastAPI"], missing=["Kubernetes"])

    response = apply(client, job["id"])

    assert response.status_code == 201
    data = response.json()
    assert data["score"] == 88
    assert data["verdict"] == "High"
    assert data["matched_skills"] == ["Python", "FastAPI"]
    assert data["missing_skills"] == ["Kubernetes"]

    prompt = fake_llm.calls[0][0]["content"]
    assert JD_TEXT.decode() in prompt
    assert RESUME_TEXT.decode() in prompt

    db = TestSessionLocal()
    try:
        application = db.query(Application).filter(Application.id == data["application_id"]).one()
        assert application.status == "analyzed"
        assert application.score == 88
        assert application.jd_text == JD_TEXT.decode()
        assert application.resume_text == RESUME_TEXT.decode()
        assert storage.read("resumes", application.resume_storage_key) == RESUME_TEXT
    finally:
        db.close()


def test_apply_with_unsupported_resume(client, job, fake_llm):
    response = apply(client, job["id"], content=b"img", filename="resume.png")
    assert response.status_code == 400
    assert "Unsupported file format" in response.json()["detail"]
    assert fake_llm.calls == []

    db = TestSessionLocal()
    try:
        assert db.query(Application).count() == 0
    finally:
        db.close()


def test_apply_requires_name(client, job):
    response = apply(client, job["id"], name="   ")
    assert response.status_code == 400


def test_apply_to_unknown_job(client):
    assert apply(client, 12345).status_code == 404


def test_failed_analysis_leaves_pending_application(client, job, fake_llm):
    fake_llm.content = "Sorry, I can't score this."

    response = apply(client, job["id"])

    assert response.status_code == 502
    db = TestSessionLocal()
    try:
        application = db.query(Application).one()
        assert application.status == "pending"
        assert application.score == 0
        assert application.verdict == "Low"
        assert application.matched_skills == []
    finally:
        db.close()


def test_admin_application_listing_and_filters(client, admin_headers, job, fake_llm):
    fake_llm.content = analysis_reply(score=92, verdict="High", matched=["Python"])
    apply(client, job["id"], name="Ada Lovelace")
    fake_llm.content = analysis_reply(score=35, verdict="Low", matched=[], missing=["Python"])
    apply(client, job["id"], name="Bob Builder")

    response = client.get("/admin/applications", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["filtered"] == 2
    assert {app["job_title"] for app in data["applications"]} == {"Backend Engineer"}

    high = client.get("/admin/applications", params={"score": "high"}, headers=admin_headers).json()
    assert [app["full_name"] for app in high["applications"]] == ["Ada Lovelace"]

    low = client.get("/admin/applications", params={"score": "low", "search": "bob"}, headers=admin_headers).json()
    assert [app["full_name"] for app in low["applications"]] == ["Bob Builder"]
    assert low["total"] == 2


def test_admin_listing_rejects_unknown_bucket(client, admin_headers):
    response = client.get("/admin/applications", params={"score": "excellent"}, headers=admin_headers)
    assert response.status_code == 422


def test_dashboard_endpoint(client, admin_headers, job, fake_llm):
    fake_llm.content = analysis_reply(score=81, verdict="High")
    apply(client, job["id"])

    response = client.get("/admin/dashboard", headers=admin_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["total_applications"] == 1
    assert stats["high_verdict"] == 1
    assert stats["average_score"] == 81
    assert stats["job_applications"] == [{"job_id": job["id"], "name": "Backend Engineer", "applications": 1}]
    assert stats["daily_applications"][-1]["applications"] == 1


def test_delete_job_removes_applications_and_files(client, admin_headers, job, storage):
    apply(client, job["id"])
    jd_key = job["jd_file_url"].rsplit("/", 1)[-1]

    response = client.delete(f"/admin/jobs/{job['id']}", headers=admin_headers)
    assert response.status_code == 204

    db = TestSessionLocal()
    try:
        assert db.query(Job).count() == 0
        assert db.query(Application).count() == 0
    finally:
        db.close()

    assert not (storage.root / "job-descriptions" / jd_key).exists()
    assert list((storage.root / "resumes").iterdir()) == []
    assert client.get("/jobs").json()["total"] == 0


def test_delete_unknown_job(client, admin_headers):
    assert client.delete("/admin/jobs/999", headers=admin_headers).status_code == 404
