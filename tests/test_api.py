"""HTTP-level tests through TestClient over a seeded in-memory store."""

import uuid

import pytest


@pytest.fixture
def fresh_section(client, admin_headers) -> dict:
    """An empty K.1.1 section created through the API."""
    block = client.post("/api/blocks", headers=admin_headers, json={"label": "k"})
    assert block.status_code == 201, block.text
    row = client.post("/api/rows", headers=admin_headers, json={"block_id": block.json()["id"], "label": "1"})
    assert row.status_code == 201, row.text
    section = client.post("/api/sections", headers=admin_headers, json={"row_id": row.json()["id"], "label": "1"})
    assert section.status_code == 201, section.text
    return section.json()


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_login(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]


def test_login_with_wrong_password(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})

    assert response.status_code == 401


def test_me_requires_token(client, archivist_headers):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401

    response = client.get("/api/auth/me", headers=archivist_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "archivist"


def test_seeded_archive_layout(client, viewer_headers):
    blocks = client.get("/api/blocks", headers=viewer_headers).json()
    assert [block["label"] for block in blocks] == list("ABCDEFGHIJ")

    rows = client.get(f"/api/blocks/{blocks[0]['id']}/rows", headers=viewer_headers).json()
    assert [row["label"] for row in rows] == ["1", "2", "3"]

    sections = client.get(f"/api/rows/{rows[0]['id']}/sections", headers=viewer_headers).json()
    assert [section["label"] for section in sections] == ["1", "2", "3", "4"]


def test_role_enforcement(client, viewer_headers, archivist_headers, fresh_section):
    document = {"section_id": fresh_section["id"], "title": "Viewer attempt", "category": "legal"}

    assert client.post("/api/documents", headers=viewer_headers, json=document).status_code == 403
    assert client.get("/api/users", headers=viewer_headers).status_code == 403
    assert client.get("/api/users", headers=archivist_headers).status_code == 403
    assert client.post("/api/blocks", headers=archivist_headers, json={"label": "Z"}).status_code == 403


def test_document_lifecycle(client, archivist_headers, viewer_headers, fresh_section):
    created = []
    for title in ("حكم في القضية رقم 7", "محضر جلسة استماع"):
        response = client.post("/api/documents", headers=archivist_headers, json={
            "section_id": fresh_section["id"],
            "title": title,
            "category": "civil",
            "metadata": {"court": "محكمة الاستئناف بالرباط"},
        })
        assert response.status_code == 201, response.text
        created.append(response.json())

    assert [doc["reference"] for doc in created] == ["K.1.1.1", "K.1.1.2"]
    assert [doc["sequence"] for doc in created] == [1, 2]
    assert created[0]["status"] == "active"

    listed = client.get("/api/documents", headers=viewer_headers, params={"section_id": fresh_section["id"]})
    assert listed.status_code == 200
    assert [doc["reference"] for doc in listed.json()] == ["K.1.1.2", "K.1.1.1"]
    assert listed.json()[0]["block"]["label"] == "K"
    assert listed.json()[0]["sequence"] == 2
    assert listed.json()[0]["creator"]["username"] == "archivist"

    searched = client.get("/api/documents", headers=viewer_headers, params={
        "section_id": fresh_section["id"], "search": "جلسة"
    })
    assert [doc["reference"] for doc in searched.json()] == ["K.1.1.2"]

    document_id = created[0]["id"]
    updated = client.put(f"/api/documents/{document_id}", headers=archivist_headers, json={"status": "archived"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "archived"
    assert updated.json()["title"] == "حكم في القضية رقم 7"

    paper = client.post("/api/papers", headers=archivist_headers, json={
        "document_id": document_id, "title": "الوثيقة الأساسية", "file_type": "pdf", "file_size": 2048
    })
    assert paper.status_code == 201
    papers = client.get(f"/api/documents/{document_id}/papers", headers=viewer_headers).json()
    assert [p["title"] for p in papers] == ["الوثيقة الأساسية"]

    assert client.delete(f"/api/documents/{document_id}", headers=archivist_headers).status_code == 204
    assert client.get(f"/api/documents/{document_id}", headers=viewer_headers).status_code == 404
    assert client.get(f"/api/documents/{document_id}/papers", headers=viewer_headers).json() == []

    following = client.post("/api/documents", headers=archivist_headers, json={
        "section_id": fresh_section["id"], "title": "قرار استئناف", "category": "legal"
    })
    assert following.json()["reference"] == "K.1.1.3"


def test_missing_entities(client, admin_headers):
    missing = uuid.uuid4()

    assert client.get(f"/api/documents/{missing}", headers=admin_headers).status_code == 404
    assert client.put(f"/api/documents/{missing}", headers=admin_headers, json={"title": "x"}).status_code == 404
    assert client.delete(f"/api/documents/{missing}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/papers/{missing}", headers=admin_headers).status_code == 404
    assert client.get(f"/api/blocks/{missing}", headers=admin_headers).status_code == 404
    assert client.get(f"/api/users/{missing}", headers=admin_headers).status_code == 404

    response = client.post("/api/documents", headers=admin_headers, json={
        "section_id": str(missing), "title": "Nowhere", "category": "legal"
    })
    assert response.status_code == 404


def test_invalid_filter_values_are_rejected(client, admin_headers):
    response = client.get("/api/documents", headers=admin_headers, params={"status": "lost"})

    assert response.status_code == 422


def test_dashboard_stats_match_document_list(client, viewer_headers):
    stats = client.get("/api/dashboard/stats", headers=viewer_headers)
    documents = client.get("/api/documents", headers=viewer_headers).json()

    assert stats.status_code == 200
    body = stats.json()
    assert body["totalCases"] == len(documents)
    assert body["processedDocs"] == sum(1 for doc in documents if doc["status"] == "active")
    assert body["pendingDocs"] + body["archivedCases"] + body["processedDocs"] == body["totalCases"]


def test_recent_documents_are_newest_first(client, viewer_headers):
    recent = client.get("/api/dashboard/recent-documents", headers=viewer_headers, params={"limit": 5}).json()

    assert len(recent) == 5
    created = [doc["created_at"] for doc in recent]
    assert created == sorted(created, reverse=True)


def test_profile_and_progress(client, archivist_headers, viewer_headers, admin_headers):
    profile = client.get("/api/profile", headers=archivist_headers)
    assert profile.status_code == 200
    statistics = profile.json()["statistics"]
    assert {"totalDocuments", "completionRate", "categoryProgress"} <= set(statistics)

    progress = client.get("/api/dashboard/user-progress", headers=archivist_headers).json()
    assert progress["documentsCreated"] == statistics["totalDocuments"]
    assert set(progress["categoryBreakdown"]) == {
        "legal", "financial", "administrative", "civil", "criminal", "commercial", "family"
    }

    calendar = client.get("/api/dashboard/activity-calendar", headers=archivist_headers).json()
    assert sum(calendar.values()) == progress["documentsCreated"]

    archivist_id = client.get("/api/auth/me", headers=archivist_headers).json()["id"]
    assert client.get("/api/profile", headers=viewer_headers, params={"user_id": archivist_id}).status_code == 403
    assert client.get("/api/profile", headers=admin_headers, params={"user_id": archivist_id}).status_code == 200

    unknown = {"user_id": str(uuid.uuid4())}
    assert client.get("/api/dashboard/activity-calendar", headers=admin_headers, params=unknown).status_code == 404
    assert client.get("/api/profile", headers=admin_headers, params=unknown).status_code == 404


def test_user_management(client, admin_headers, archivist_headers, fresh_section):
    response = client.post("/api/users", headers=admin_headers, json={
        "username": "clerk",
        "email": "clerk@cour-appel.ma",
        "full_name": "Greffier",
        "password": "clerk123",
    })
    assert response.status_code == 201
    clerk = response.json()
    assert clerk["role"] == "viewer"

    duplicate = client.post("/api/users", headers=admin_headers, json={
        "username": "clerk", "email": "other@cour-appel.ma", "full_name": "Other", "password": "clerk123"
    })
    assert duplicate.status_code == 409

    deactivated = client.post(f"/api/users/{clerk['id']}/deactivate", headers=admin_headers)
    assert deactivated.json()["is_active"] is False
    login = client.post("/api/auth/login", json={"username": "clerk", "password": "clerk123"})
    assert login.status_code == 401

    assert client.delete(f"/api/users/{clerk['id']}", headers=admin_headers).status_code == 204

    client.post("/api/documents", headers=archivist_headers, json={
        "section_id": fresh_section["id"], "title": "Archivist case", "category": "family"
    })
    archivist_id = client.get("/api/auth/me", headers=archivist_headers).json()["id"]
    assert client.delete(f"/api/users/{archivist_id}", headers=admin_headers).status_code == 409
