def test_achievements_default_to_unpublished(client, admin_headers):
    response = client.post(
        "/api/achievements",
        json={"title": "Cloud", "description": "Certified", "items": ["AWS", "GCP"]},
        headers=admin_headers,
    )
    assert response.status_code == 201
    achievement = response.json()["data"]
    assert achievement["is_published"] is False
    assert achievement["icon"] == "award"
    assert achievement["category"] == "skills"
    assert client.get("/api/achievements").json()["data"] == []


def test_achievement_enums_are_validated(client, admin_headers):
    response = client.post(
        "/api/achievements",
        json={"title": "Odd", "description": "d", "icon": "rocket"},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_achievements_filter_by_category(client, admin_headers):
    for title, category in (("Python", "skills"), ("Lead", "experience")):
        client.post(
            "/api/achievements",
            json={"title": title, "description": "d", "category": category, "isPublished": True},
            headers=admin_headers,
        )

    experience = client.get("/api/achievements", params={"category": "experience"}).json()["data"]
    assert [item["title"] for item in experience] == ["Lead"]
    assert len(client.get("/api/achievements/admin/all", headers=admin_headers).json()["data"]) == 2


def test_achievements_have_no_detail_route(client):
    assert client.get("/api/achievements/some-id").status_code in (404, 405)


def test_section_crud_by_name(client, admin_headers):
    response = client.post(
        "/api/sections",
        json={
            "name": "hero-section",
            "title": "Hello",
            "links": [{"url": "https://example.com", "label": "Site"}],
            "metadata": {"tagline": "Builder"},
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    section = response.json()["data"]
    assert section["is_published"] is True
    assert section["metadata"] == {"tagline": "Builder"}

    fetched = client.get("/api/sections/hero-section").json()["data"]
    assert fetched["links"] == [{"url": "https://example.com", "label": "Site"}]

    updated = client.put(
        f"/api/sections/{section['id']}",
        json={"metadata": {"tagline": "Founder"}},
        headers=admin_headers,
    ).json()["data"]
    assert updated["metadata"] == {"tagline": "Founder"}
    assert updated["title"] == "Hello"

    deleted = client.delete(f"/api/sections/{section['id']}", headers=admin_headers)
    assert deleted.json()["message"] == "Section deleted successfully"
    assert client.get("/api/sections/hero-section").status_code == 404


def test_duplicate_section_name_is_rejected(client, admin_headers):
    body = {"name": "vision-section", "title": "One"}
    assert client.post("/api/sections", json=body, headers=admin_headers).status_code == 201
    response = client.post("/api/sections", json=body, headers=admin_headers)
    assert response.status_code == 400


def test_sections_list_in_order(client, admin_headers):
    for name, order in (("b", 2), ("a", 1), ("c", 3)):
        client.post("/api/sections", json={"name": name, "order": order}, headers=admin_headers)
    names = [section["name"] for section in client.get("/api/sections").json()["data"]]
    assert names == ["a", "b", "c"]


def test_section_form_fields_accept_json_strings(client, admin_headers):
    response = client.post(
        "/api/sections",
        data={"name": "form-section", "metadata": '{"count": 3}', "images": '[{"url": "/a.png"}]'},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    section = response.json()["data"]
    assert section["metadata"] == {"count": 3}
    assert section["images"] == [{"url": "/a.png", "alt": None}]
