"""
Tests for the image upload endpoints and storage backends
"""
import asyncio
import os

import apps.uploads.storage as storage
from apps.uploads.storage import CloudinaryStorage, LocalStorage, public_id_from_url

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def stored_files():
    """Every file currently under the upload directory."""
    found = []
    for root, _, files in os.walk(storage.UPLOAD_DIR):
        found.extend(os.path.join(root, name) for name in files)
    return found


def png(name="photo.png", content=PNG_BYTES):
    return (name, content, "image/png")


def create_project(gql, headers, images=None):
    body = gql(
        "mutation($input: CreateProjectInput!) { createProject(input: $input) { id images } }",
        {"input": {
            "name": "Gallery",
            "githubLink": "https://github.com/example/gallery",
            "description": "Project with images",
            "images": images or [],
        }},
        headers,
    )
    assert "errors" not in body, body
    return body["data"]["createProject"]


def create_about_me(gql, headers):
    body = gql(
        "mutation($input: CreateAboutMeInput!) { createAboutMe(input: $input) { id } }",
        {"input": {"fullName": "Ola", "dob": "1995-04-12", "startedCoding": "2014-08-01", "bio": "Bio"}},
        headers,
    )
    assert "errors" not in body, body


def test_upload_image(client, editor_headers):
    response = client.post("/api/uploads/general", files={"file": png()}, headers=editor_headers)

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["url"].startswith("/uploads/general/")
    assert data["url"].endswith(".png")
    assert data["filename"] in data["url"]

    files = stored_files()
    assert len(files) == 1
    with open(files[0], "rb") as f:
        assert f.read() == PNG_BYTES

    served = client.get(data["url"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES


def test_upload_requires_login(client):
    response = client.post("/api/uploads/general", files={"file": png()})

    assert response.status_code == 401
    assert response.json()["category"] == "security"
    assert stored_files() == []


def test_upload_rejects_disallowed_type(client, editor_headers):
    response = client.post(
        "/api/uploads/general",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert "Invalid file type" in response.json()["error"]
    assert stored_files() == []


def test_upload_rejects_oversized_file(client, editor_headers, monkeypatch):
    monkeypatch.setattr(storage, "MAX_UPLOAD_SIZE", 32)

    response = client.post(
        "/api/uploads/general",
        files={"file": png(content=b"x" * 33)},
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert "too large" in response.json()["error"]
    assert stored_files() == []


def test_upload_rejects_unknown_folder(client, editor_headers):
    response = client.post("/api/uploads/secret", files={"file": png()}, headers=editor_headers)

    assert response.status_code == 400
    assert stored_files() == []


def test_upload_project_images(gql, client, editor_headers):
    project = create_project(gql, editor_headers)

    response = client.post(
        f"/api/projects/{project['id']}/images",
        files=[("files", png("a.png")), ("files", png("b.png"))],
        headers=editor_headers,
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["project_id"] == project["id"]
    assert len(data["images"]) == 2
    assert all(url.startswith("/uploads/projects/") for url in data["images"])
    assert len(stored_files()) == 2

    body = gql(f'query {{ project(id: "{project["id"]}") {{ images }} }}')
    assert body["data"]["project"]["images"] == data["images"]


def test_project_image_limit(gql, client, editor_headers):
    existing = [f"https://img.example.com/{i}.png" for i in range(9)]
    project = create_project(gql, editor_headers, images=existing)

    response = client.post(
        f"/api/projects/{project['id']}/images",
        files=[("files", png("a.png")), ("files", png("b.png"))],
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert "at most 10" in response.json()["error"]
    assert stored_files() == []


def test_project_images_all_or_nothing(gql, client, editor_headers):
    project = create_project(gql, editor_headers)

    response = client.post(
        f"/api/projects/{project['id']}/images",
        files=[("files", png("a.png")), ("files", ("evil.exe", b"MZ", "application/octet-stream"))],
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert stored_files() == []


def test_upload_images_for_unknown_project(client, editor_headers):
    response = client.post(
        "/api/projects/missing/images",
        files=[("files", png())],
        headers=editor_headers,
    )

    assert response.status_code == 404
    assert stored_files() == []


def test_delete_project_image(gql, client, editor_headers):
    project = create_project(gql, editor_headers)
    uploaded = client.post(
        f"/api/projects/{project['id']}/images",
        files=[("files", png())],
        headers=editor_headers,
    ).json()["images"][0]

    response = client.delete(
        f"/api/projects/{project['id']}/images",
        params={"url": uploaded},
        headers=editor_headers,
    )

    assert response.status_code == 200
    assert response.json()["images"] == []
    assert stored_files() == []

    response = client.delete(
        f"/api/projects/{project['id']}/images",
        params={"url": uploaded},
        headers=editor_headers,
    )
    assert response.status_code == 404


def test_about_me_image_replaces_previous(gql, client, editor_headers):
    create_about_me(gql, editor_headers)

    first = client.post("/api/about-me/image", files={"file": png()}, headers=editor_headers).json()["url"]
    second = client.post("/api/about-me/image", files={"file": png()}, headers=editor_headers).json()["url"]

    assert first != second
    files = stored_files()
    assert len(files) == 1
    assert files[0].endswith(os.path.basename(second))

    body = gql("query { aboutMe { imageUrl } }")
    assert body["data"]["aboutMe"]["imageUrl"] == second

    response = client.delete("/api/about-me/image", headers=editor_headers)
    assert response.json() == {"url": None}
    assert stored_files() == []


def test_about_me_image_without_profile(client, editor_headers):
    response = client.post("/api/about-me/image", files={"file": png()}, headers=editor_headers)

    assert response.status_code == 404
    assert stored_files() == []


def test_cloudinary_config_is_public(client, monkeypatch):
    monkeypatch.setattr(storage, "CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setattr(storage, "CLOUDINARY_UPLOAD_PRESET", "portfolio_unsigned")

    response = client.get("/api/cloudinary/config")

    assert response.status_code == 200
    assert response.json() == {"cloudName": "demo", "uploadPreset": "portfolio_unsigned"}


def test_local_storage_ignores_foreign_urls(tmp_path):
    local = LocalStorage(upload_dir=str(tmp_path), base_url="/uploads")

    assert local.path_for("https://cdn.example.com/a.png") is None
    assert local.path_for("/uploads/../../etc/passwd") is None
    assert local.path_for("/uploads/projects/a.png") == str(tmp_path / "projects" / "a.png")


def test_cloudinary_public_id():
    url = "https://res.cloudinary.com/demo/image/upload/v1712345678/portfolio/projects/abc123.png"
    assert public_id_from_url(url) == "portfolio/projects/abc123"
    assert public_id_from_url("/uploads/projects/abc.png") is None


def test_cloudinary_storage_uses_sdk(monkeypatch):
    calls = []

    def fake_upload(file, **options):
        calls.append(("upload", file.read(), options))
        return {
            "public_id": "portfolio/projects/abc123",
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/portfolio/projects/abc123.png",
        }

    def fake_destroy(public_id, **options):
        calls.append(("destroy", public_id))
        return {"result": "not found" if public_id.endswith("gone") else "ok"}

    monkeypatch.setattr(storage.cloudinary.uploader, "upload", fake_upload)
    monkeypatch.setattr(storage.cloudinary.uploader, "destroy", fake_destroy)
    cloudinary_storage = CloudinaryStorage("demo", "key", "secret")

    stored = asyncio.run(cloudinary_storage.save("projects", PNG_BYTES, "image/png"))
    assert stored.url.startswith("https://res.cloudinary.com/demo/")
    assert stored.filename == "portfolio/projects/abc123"
    assert calls[0] == ("upload", PNG_BYTES, {"folder": "portfolio/projects", "resource_type": "image"})

    assert asyncio.run(cloudinary_storage.delete(stored.url)) is True
    assert calls[1] == ("destroy", "portfolio/projects/abc123")

    # Already removed on the Cloudinary side
    gone = "https://res.cloudinary.com/demo/image/upload/v1/portfolio/projects/gone.png"
    assert asyncio.run(cloudinary_storage.delete(gone)) is True

    # Local URLs are never sent to Cloudinary
    assert asyncio.run(cloudinary_storage.delete("/uploads/projects/abc.png")) is False
    assert len(calls) == 3


def test_security_headers_and_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "portfolio", "database": "connected"}
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "no-store" in response.headers["Cache-Control"]
