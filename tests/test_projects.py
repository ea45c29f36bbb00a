PNG = b"\x89PNG\r\n\x1a\n" + b"1" * 32


def create_project(client, headers, **overrides):
    body = {
        "title": "Portfolio Engine",
        "description": "A site builder",
        "technologies": ["python", "fastapi"],
        "category": "web",
        "demoUrl": "https://demo.example.com",
        "githubUrl": "https://github.com/example/engine",
        "isPublished": True,
        "order": 0,
    }
    body.update(overrides)
    response = client.post("/api/projects", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_project_defaults(client, admin_headers):
    project = create_project(client, admin_headers)
    assert project["slug"] == "portfolio-engine"
    assert project["status"] == "completed"
    assert project["images"] == []
    assert project["author"] == {"email": "admin@example.com"}


def test_invalid_url_is_a_validation_error(client, admin_headers):
    response = client.post(
        "/api/projects",
        json={"title": "Bad", "description": "d", "demoUrl": "ftp://nope"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_empty_url_is_stored_as_null(client, admin_headers):
    project = create_project(client, admin_headers, demoUrl="")
    assert project["demo_url"] is None


def test_public_list_orders_by_order_then_newest(client, admin_headers):
    create_project(client, admin_headers, title="Second", order=2)
    create_project(client, admin_headers, title="First A", order=1)
    create_project(client, admin_headers, title="First B", order=1)
    create_project(client, admin_headers, title="Hidden", order=0, isPublished=False)

    data = client.get("/api/projects").json()["data"]
    assert [project["title"] for project in data] == ["First B", "First A", "Second"]


def test_category_filter_and_search(client, admin_headers):
    create_project(client, admin_headers, title="Phone App", category="mobile", description="android client")
    create_project(client, admin_headers, title="Web App", category="web", description="dashboard")

    mobile = client.get("/api/projects", params={"category": "mobile"}).json()["data"]
    assert [project["title"] for project in mobile] == ["Phone App"]

    searched = client.get("/api/projects", params={"search": "dashboard"}).json()["data"]
    assert [project["title"] for project in searched] == ["Web App"]


def test_detail_by_slug(client, admin_headers):
    create_project(client, admin_headers, title="Shown Project")
    response = client.get("/api/projects/shown-project")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Shown Project"
    assert client.get("/api/projects/missing").status_code == 404


def test_gallery_upload_replace_and_cleanup(client, admin_headers, storage):
    response = client.post(
        "/api/projects",
        data={"title": "Gallery", "description": "d", "technologies": "python, sql"},
        files=[
            ("featuredImage", ("cover.png", PNG, "image/png")),
            ("images", ("one.png", PNG, "image/png")),
            ("images", ("two.png", PNG, "image/png")),
        ],
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    project = response.json()["data"]
    assert project["technologies"] == ["python", "sql"]
    assert project["featured_image_url"] == "https://cdn.example.com/portfolio/projects/1-cover.png"
    assert project["images"] == [
        "https://cdn.example.com/portfolio/projects/2-one.png",
        "https://cdn.example.com/portfolio/projects/3-two.png",
    ]

    updated = client.put(
        f"/api/projects/{project['id']}",
        data={"description": "new"},
        files=[("images", ("three.png", PNG, "image/png"))],
        headers=admin_headers,
    ).json()["data"]
    assert storage.deleted == ["portfolio/projects/2-one.png", "portfolio/projects/3-two.png"]
    assert updated["images"] == ["https://cdn.example.com/portfolio/projects/4-three.png"]
    assert updated["featured_image_url"] == project["featured_image_url"]

    assert client.delete(f"/api/projects/{project['id']}", headers=admin_headers).status_code == 200
    assert storage.deleted[2:] == ["portfolio/projects/1-cover.png", "portfolio/projects/4-three.png"]


def test_too_many_gallery_images(client, admin_headers):
    files = [("images", (f"{index}.png", PNG, "image/png")) for index in range(11)]
    response = client.post(
        "/api/projects",
        data={"title": "Overflow", "description": "d"},
        files=files,
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_unexpected_file_field(client, admin_headers):
    response = client.post(
        "/api/projects",
        data={"title": "Odd", "description": "d"},
        files=[("attachment", ("x.png", PNG, "image/png"))],
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Unexpected file field: attachment"


def test_null_clears_optional_fields(client, admin_headers):
    project = create_project(client, admin_headers, longDescription="The long story")

    response = client.put(
        f"/api/projects/{project['id']}",
        json={"demoUrl": None, "longDescription": None, "title": None},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    updated = response.json()["data"]
    assert updated["demo_url"] is None
    assert updated["long_description"] is None
    assert updated["title"] == "Portfolio Engine"
    assert updated["github_url"] == project["github_url"]


def test_clearing_featured_image_deletes_the_asset(client, admin_headers, storage):
    project = client.post(
        "/api/projects",
        data={"title": "Cover", "description": "d"},
        files={"featuredImage": ("cover.png", PNG, "image/png")},
        headers=admin_headers,
    ).json()["data"]

    updated = client.put(
        f"/api/projects/{project['id']}", json={"featuredImageUrl": None}, headers=admin_headers
    ).json()["data"]
    assert updated["featured_image_url"] is None
    assert storage.deleted == ["portfolio/projects/1-cover.png"]
