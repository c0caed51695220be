import pytest

from app.core.config import settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


async def test_upload_logo_stores_file(client, auth_headers, upload_dir):
    r = await client.post(
        "/api/upload/logo",
        files={"file": ("brand.png", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )
    assert r.status_code == 200
    url = r.json()["url"]
    assert url.startswith("/uploads/logos/")
    assert url.endswith(".png")

    stored = upload_dir / "logos" / url.rsplit("/", 1)[-1]
    assert stored.read_bytes() == PNG_BYTES


async def test_upload_names_are_unique(client, auth_headers, upload_dir):
    urls = set()
    for _ in range(3):
        r = await client.post(
            "/api/upload/logo",
            files={"file": ("same.svg", b"<svg/>", "image/svg+xml")},
            headers=auth_headers,
        )
        urls.add(r.json()["url"])
    assert len(urls) == 3


async def test_upload_rejects_disallowed_type(client, auth_headers, upload_dir):
    r = await client.post(
        "/api/upload/logo",
        files={"file": ("notes.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Type de fichier non autorisé. Utilisez PNG, JPEG, GIF, WebP ou SVG"}
    assert not (upload_dir / "logos").exists()


async def test_upload_rejects_large_file(client, auth_headers, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "MAX_LOGO_SIZE_BYTES", 1024 * 1024)
    r = await client.post(
        "/api/upload/logo",
        files={"file": ("big.png", b"\x00" * (1024 * 1024 + 1), "image/png")},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Le fichier est trop volumineux. Taille maximale : 1MB"}


async def test_upload_without_file(client, auth_headers, upload_dir):
    r = await client.post("/api/upload/logo", data={"other": "x"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Aucun fichier fourni"}


@pytest.mark.parametrize("headers", [None, {"Authorization": "Bearer not-a-token"}])
async def test_upload_requires_authentication(client, upload_dir, headers):
    r = await client.post(
        "/api/upload/logo",
        files={"file": ("brand.png", PNG_BYTES, "image/png")},
        headers=headers,
    )
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Bearer"


async def test_stored_extension_follows_content_type_not_filename(client, auth_headers, upload_dir):
    r = await client.post(
        "/api/upload/logo",
        files={"file": ("evil.html", b"<script>alert(1)</script>", "image/png")},
        headers=auth_headers,
    )
    assert r.status_code == 200
    url = r.json()["url"]
    assert url.endswith(".png")
    assert not list((upload_dir / "logos").glob("*.html"))
