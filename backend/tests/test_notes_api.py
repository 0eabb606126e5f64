from kcnotes.utils.jwt_auth import create_access_token


def test_create_note_for_user_seven_then_listed(client, services, settings):
    services.db.execute("INSERT INTO users (id, username, password) VALUES (?, ?, ?)", (7, "seven", "x"))
    token = create_access_token(7, "seven", settings)

    r = client.post("/notes", headers={"Authorization": f"Bearer {token}"}, json={"title": "T", "content": "C"})
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    note = body["data"]["note"]
    assert isinstance(note["id"], int)
    assert note["title"] == "T"
    assert note["content"] == "C"
    assert note["user_id"] == 7
    assert note["created_at"]

    r = client.get("/notes")
    assert r.status_code == 200
    assert note["id"] in [n["id"] for n in r.json()["data"]["notes"]]


def test_create_note_requires_token(client):
    r = client.post("/notes", json={"title": "T", "content": "C"})
    assert r.status_code == 401


def test_create_note_requires_all_fields(client, auth_headers):
    headers = auth_headers()
    r = client.post("/notes", headers=headers, json={"title": "T"})
    assert r.status_code == 400
    assert r.json()["message"] == "Content is required."

    r = client.post("/notes", headers=headers, json={"title": "", "content": "C"})
    assert r.status_code == 400
    assert r.json()["message"] == "Title is required."


def test_list_notes_is_public_and_global(client, auth_headers):
    # list is unauthenticated and spans every user, while /notes/{id} is owner-scoped
    a = auth_headers("userA")
    b = auth_headers("userB")
    client.post("/notes", headers=a, json={"title": "a1", "content": "c"})
    r = client.post("/notes", headers=b, json={"title": "b1", "content": "c"})
    b_note_id = r.json()["data"]["note"]["id"]

    r = client.get("/notes")
    assert r.status_code == 200
    assert sorted(n["title"] for n in r.json()["data"]["notes"]) == ["a1", "b1"]

    assert client.get(f"/notes/{b_note_id}", headers=a).status_code == 400


def test_get_note_is_owner_scoped(client, auth_headers):
    a = auth_headers("userA")
    b = auth_headers("userB")
    note_id = client.post("/notes", headers=a, json={"title": "t", "content": "c"}).json()["data"]["note"]["id"]

    r = client.get(f"/notes/{note_id}", headers=a)
    assert r.status_code == 200
    assert r.json()["data"]["note"]["title"] == "t"

    r = client.get(f"/notes/{note_id}", headers=b)
    assert r.status_code == 400
    assert r.json()["message"] == "Note not found."

    assert client.get(f"/notes/{note_id}").status_code == 401


def test_invalid_note_id_is_rejected(client, auth_headers):
    headers = auth_headers()
    huge = "9" * 30
    for bad in ("abc", "0", "-1", "5/extra", "%C2%B2", "\uff11", huge, str(2**63)):
        r = client.get(f"/notes/{bad}", headers=headers)
        assert r.status_code == 400, bad
        assert r.json()["message"] == "Invalid note id."


def test_update_note(client, auth_headers):
    a = auth_headers("userA")
    note_id = client.post("/notes", headers=a, json={"title": "t1", "content": "c1"}).json()["data"]["note"]["id"]

    r = client.patch(f"/notes/{note_id}", headers=a, json={"title": "t2"})
    assert r.status_code == 200
    note = r.json()["data"]["note"]
    assert note["title"] == "t2"
    assert note["content"] == "c1"
    assert note["updated_at"]


def test_update_note_rejects_empty_patch_and_other_owner(client, auth_headers):
    a = auth_headers("userA")
    b = auth_headers("userB")
    note_id = client.post("/notes", headers=a, json={"title": "t1", "content": "c1"}).json()["data"]["note"]["id"]

    r = client.patch(f"/notes/{note_id}", headers=a, json={})
    assert r.status_code == 400
    assert r.json()["message"] == "Nothing to update."

    r = client.patch(f"/notes/{note_id}", headers=b, json={"title": "hacked"})
    assert r.status_code == 400

    r = client.get(f"/notes/{note_id}", headers=a)
    assert r.json()["data"]["note"]["title"] == "t1"


def test_delete_note(client, auth_headers):
    a = auth_headers("userA")
    b = auth_headers("userB")
    note_id = client.post("/notes", headers=a, json={"title": "t", "content": "c"}).json()["data"]["note"]["id"]

    assert client.delete(f"/notes/{note_id}", headers=b).status_code == 400

    r = client.delete(f"/notes/{note_id}", headers=a)
    assert r.status_code == 200
    assert r.json()["data"]["note"]["id"] == note_id

    assert client.get(f"/notes/{note_id}", headers=a).status_code == 400
    assert client.delete(f"/notes/{note_id}", headers=a).status_code == 400


def test_missing_note_is_bad_request_like_a_foreign_one(client, auth_headers):
    a = auth_headers("userA")
    r = client.get("/notes/999", headers=a)
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Note not found.", "data": None}


def test_create_note_for_deleted_user_is_unauthorized(client, auth_headers, services):
    headers = auth_headers("userA")
    services.users.delete(services.users.get("userA").id)

    r = client.post("/notes", headers=headers, json={"title": "t", "content": "c"})
    assert r.status_code == 401
    assert r.json()["message"] == "Unauthorized."
    assert services.notes.list_all() == []


def test_create_note_reports_storage_failure(client, auth_headers, services, monkeypatch):
    headers = auth_headers("userA")
    monkeypatch.setattr(services.notes, "get_note", lambda user_id, note_id: None)

    r = client.post("/notes", headers=headers, json={"title": "t", "content": "c"})
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Error creating note.", "data": None}
