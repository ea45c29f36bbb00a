MESSAGE = {
    "name": "Ada",
    "email": "Ada@Example.COM",
    "subject": "Project enquiry",
    "message": "Can we talk?",
}


def submit(client, **overrides):
    return client.post("/api/contact", json={**MESSAGE, **overrides})


def test_public_submission(client):
    response = submit(client)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Contact message sent successfully"
    assert body["data"]["email"] == "ada@example.com"
    assert body["data"]["is_read"] is False
    assert body["data"]["is_replied"] is False


def test_submission_is_validated(client):
    response = submit(client, email="not-an-email", message="")
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation error"
    assert len(body["errors"]) == 2


def test_reading_messages_requires_admin(client, user_headers):
    submit(client)
    assert client.get("/api/contact").status_code == 401
    assert client.get("/api/contact", headers=user_headers).status_code == 403


def test_admin_reads_marks_and_deletes(client, admin_headers):
    first = submit(client, subject="First").json()["data"]
    submit(client, subject="Second")

    listing = client.get("/api/contact", headers=admin_headers).json()
    assert [item["subject"] for item in listing["data"]] == ["Second", "First"]
    assert listing["pagination"]["total"] == 2

    detail = client.get(f"/api/contact/{first['id']}", headers=admin_headers).json()["data"]
    assert detail["subject"] == "First"

    marked = client.put(f"/api/contact/{first['id']}", json={"isRead": True}, headers=admin_headers).json()["data"]
    assert marked["is_read"] is True

    deleted = client.delete(f"/api/contact/{first['id']}", headers=admin_headers).json()
    assert deleted["message"] == "Contact message deleted successfully"
    missing = client.get(f"/api/contact/{first['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Contact message not found"


def test_reply_is_stored_and_marks_read(client, admin_headers):
    contact = submit(client).json()["data"]
    response = client.post(
        f"/api/contact/{contact['id']}/reply",
        json={"replyMessage": "Happy to chat."},
        headers=admin_headers,
    )
    assert response.status_code == 200
    replied = response.json()["data"]
    assert replied["reply_message"] == "Happy to chat."
    assert replied["is_replied"] is True
    assert replied["is_read"] is True
    assert replied["replied_at"] is not None


def test_reply_to_missing_contact(client, admin_headers):
    response = client.post("/api/contact/nope/reply", json={"reply_message": "hi"}, headers=admin_headers)
    assert response.status_code == 404
