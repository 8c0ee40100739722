"""Survey routes: create/list/read/update/delete, parameter loading and authorization.

Invariants:
    - created_by and created_on are always assigned by the server
    - Listing is newest first
    - Update touches title and content only
    - Unknown or malformed ids fail with "Failed to load survey <id>"
    - Listing by location reports success as {state, surveys} only
    - Only admins may update or delete, creators included
"""

from datetime import datetime


def create_survey(client, headers, **body):
    payload = {"title": "T", "content": "C"}
    payload.update(body)
    res = client.post("/api/surveys", json=payload, headers=headers)
    assert res.status_code == 200, res.text
    return res.json()


def test_create_assigns_creator_and_time(client, user):
    """Client-supplied created_by/created_on are ignored."""
    account, headers = user
    before = datetime.now().astimezone()

    res = client.post(
        "/api/surveys",
        json={
            "title": "T",
            "content": "C",
            "created_by": 999,
            "created_on": "1999-01-01T00:00:00+00:00",
        },
        headers=headers,
    )

    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "T"
    assert body["content"] == "C"
    assert body["created_by"] == {
        "id": account["id"],
        "first_name": "Uma",
        "last_name": "User",
        "full_name": "Uma User",
    }
    created_on = datetime.fromisoformat(body["created_on"].replace("Z", "+00:00"))
    assert created_on >= before.replace(microsecond=0)
    assert isinstance(body["id"], int)


def test_create_requires_login(client):
    res = client.post("/api/surveys", json={"title": "T", "content": "C"})
    assert res.status_code == 401
    assert res.json() == {"message": "User is not logged in"}


def test_create_with_invalid_token_is_rejected(client):
    res = client.post(
        "/api/surveys",
        json={"title": "T"},
        headers={"Authorization": "Bearer not.a.token"},
    )
    assert res.status_code == 401


def test_create_missing_title_is_validation_error(client, user):
    _, headers = user
    res = client.post("/api/surveys", json={"content": "C"}, headers=headers)
    assert res.status_code == 400
    assert res.json()["message"].startswith("title")


def test_create_blank_title_reports_validator_message(client, user):
    _, headers = user
    res = client.post("/api/surveys", json={"title": "   "}, headers=headers)
    assert res.status_code == 400
    assert res.json() == {"message": "Title cannot be blank"}


def test_create_with_unknown_location_is_validation_error(client, user):
    """The foreign key violation surfaces as a 400 with the constraint message."""
    _, headers = user
    res = client.post("/api/surveys", json={"title": "T", "location_id": 4242}, headers=headers)
    assert res.status_code == 400
    assert "FOREIGN KEY" in res.json()["message"]


def test_list_is_newest_first(client, user):
    _, headers = user
    first = create_survey(client, headers, title="first")
    second = create_survey(client, headers, title="second")

    res = client.get("/api/surveys")

    assert res.status_code == 200
    assert [s["id"] for s in res.json()] == [second["id"], first["id"]]


def test_list_populates_creator(client, user):
    _, headers = user
    create_survey(client, headers)
    [survey] = client.get("/api/surveys").json()
    assert survey["created_by"]["full_name"] == "Uma User"


def test_list_empty(client):
    res = client.get("/api/surveys")
    assert res.status_code == 200
    assert res.json() == []


def test_read_returns_loaded_survey(client, user):
    _, headers = user
    survey = create_survey(client, headers)
    res = client.get(f"/api/surveys/{survey['id']}")
    assert res.status_code == 200
    assert res.json() == survey


def test_read_unknown_id(client):
    res = client.get("/api/surveys/12345")
    assert res.status_code == 404
    assert res.json() == {"message": "Failed to load survey 12345"}


def test_read_malformed_id(client):
    res = client.get("/api/surveys/not-an-id")
    assert res.status_code == 404
    assert res.json() == {"message": "Failed to load survey not-an-id"}


def test_update_changes_only_title_and_content(client, admin, user):
    _, admin_headers = admin
    account, user_headers = user
    survey = create_survey(client, user_headers, title="old", content="old content")

    res = client.put(
        f"/api/surveys/{survey['id']}",
        json={
            "title": "new",
            "content": "new content",
            "id": 999,
            "created_by": 1,
            "created_on": "1999-01-01T00:00:00+00:00",
            "location_id": 7,
        },
        headers=admin_headers,
    )

    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "new"
    assert body["content"] == "new content"
    assert body["id"] == survey["id"]
    assert body["created_by"]["id"] == account["id"]
    assert body["created_on"] == survey["created_on"]
    assert body["location_id"] is None
    assert client.get(f"/api/surveys/{survey['id']}").json() == body


def test_update_by_creator_without_admin_role_is_forbidden(client, user):
    _, headers = user
    survey = create_survey(client, headers)

    res = client.put(f"/api/surveys/{survey['id']}", json={"title": "x"}, headers=headers)

    assert res.status_code == 403
    assert res.json() == {"message": "User is not authorized"}
    assert client.get(f"/api/surveys/{survey['id']}").json()["title"] == "T"


def test_update_anonymous_is_unauthenticated(client, user):
    _, headers = user
    survey = create_survey(client, headers)
    res = client.put(f"/api/surveys/{survey['id']}", json={"title": "x"})
    assert res.status_code == 401


def test_update_blank_title_rejected(client, admin):
    _, headers = admin
    survey = create_survey(client, headers)
    res = client.put(f"/api/surveys/{survey['id']}", json={"title": ""}, headers=headers)
    assert res.status_code == 400
    assert res.json() == {"message": "Title cannot be blank"}


def test_delete_returns_removed_survey(client, admin):
    _, headers = admin
    survey = create_survey(client, headers)

    res = client.delete(f"/api/surveys/{survey['id']}", headers=headers)

    assert res.status_code == 200
    assert res.json() == survey
    assert client.get("/api/surveys").json() == []


def test_second_delete_is_not_found(client, admin):
    _, headers = admin
    survey = create_survey(client, headers)
    client.delete(f"/api/surveys/{survey['id']}", headers=headers)

    res = client.delete(f"/api/surveys/{survey['id']}", headers=headers)

    assert res.status_code == 404
    assert res.json() == {"message": f"Failed to load survey {survey['id']}"}


def test_delete_by_non_admin_is_forbidden(client, user):
    _, headers = user
    survey = create_survey(client, headers)
    res = client.delete(f"/api/surveys/{survey['id']}", headers=headers)
    assert res.status_code == 403
    assert client.get(f"/api/surveys/{survey['id']}").status_code == 200


def test_list_by_location_without_surveys(client):
    res = client.get("/api/locations/77/surveys")
    assert res.status_code == 200
    assert res.json() == {"state": "failure", "surveys": None, "message": "No survey found"}


def test_list_by_location_with_surveys(client, user):
    _, headers = user
    location = client.post("/api/locations", json={"name": "Office"}).json()
    other = client.post("/api/locations", json={"name": "Depot"}).json()
    first = create_survey(client, headers, location_id=location["id"])
    second = create_survey(client, headers, location_id=location["id"])
    create_survey(client, headers, location_id=other["id"])

    res = client.get(f"/api/locations/{location['id']}/surveys")

    assert res.status_code == 200
    body = res.json()
    assert body["state"] == "success"
    assert [s["id"] for s in body["surveys"]] == [second["id"], first["id"]]
    assert set(body) == {"state", "surveys"}


def test_list_by_location_malformed_id(client):
    res = client.get("/api/locations/abc/surveys")
    assert res.status_code == 404
    assert res.json() == {"message": "Failed to load location abc"}
