"""
Tests for the image upload endpoint.
"""
from dataclasses import replace

from projecthub.core.upload_constants import MAX_IMAGE_SIZE_BYTES
from projecthub.integrations.storage import StorageGateway, decode_inline_url
from projecthub.main import app
from projecthub.modules.uploads.deps import get_storage_gateway

PNG = b"\x89PNG\r\n\x1a\n" + b"\x01" * 32


def _upload(client, headers, content=PNG, content_type="image/png", filename="photo.png"):
    return client.post(
        "/api/upload",
        files={"image": (filename, content, content_type)},
        headers=headers,
    )


class TestUploadToObjectStore:
    """Object store reachable."""

    def test_returns_public_url(self, client, auth_headers, fake_store):
        response = _upload(client, auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"url", "filename", "bucket"}
        assert data["bucket"] == "project-images"
        assert data["url"] == f"http://minio.local:9000/project-images/{data['filename']}"
        assert data["filename"].endswith(".png")
        assert fake_store.get("project-images", data["filename"]) == (PNG, "image/png")

    def test_url_can_be_saved_on_project(self, client, auth_headers):
        url = _upload(client, auth_headers).json()["url"]

        response = client.post(
            "/api/projects",
            json={"project_name": "Gallery", "image": url},
            headers=auth_headers,
        )
        project_id = response.json()["id"]

        assert client.get(f"/api/projects/{project_id}").json()["image"] == url


class TestUploadFallback:
    """Object store unreachable."""

    def test_returns_inline_url(self, client, auth_headers, fake_store):
        fake_store.unavailable = True

        response = _upload(client, auth_headers, content_type="image/gif", filename="anim.gif")

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"url", "mimeType", "size", "storage"}
        assert data["storage"] == "base64"
        assert data["mimeType"] == "image/gif"
        assert data["size"] == len(PNG)
        assert decode_inline_url(data["url"]) == ("image/gif", PNG)
        assert "put_object" not in fake_store.calls

    def test_content_type_parameters_are_dropped(self, client, auth_headers, fake_store):
        fake_store.unavailable = True

        response = _upload(client, auth_headers, content_type="image/png; charset=binary")

        data = response.json()
        assert response.status_code == 200
        assert data["mimeType"] == "image/png"
        assert decode_inline_url(data["url"]) == ("image/png", PNG)


class TestUploadErrors:
    """Validation and storage failures map to HTTP errors."""

    def test_requires_auth(self, client, fake_store):
        response = _upload(client, {})

        assert response.status_code == 401
        assert fake_store.calls == []

    def test_missing_file(self, client, auth_headers):
        response = client.post("/api/upload", headers=auth_headers)

        assert response.status_code == 422

    def test_not_an_image(self, client, auth_headers, fake_store):
        response = _upload(client, auth_headers, content=b"hello", content_type="text/plain", filename="a.txt")

        assert response.status_code == 400
        assert response.json() == {"error": "AssetValidationError", "detail": "File must be an image"}
        assert fake_store.calls == []

    def test_empty_file(self, client, auth_headers):
        response = _upload(client, auth_headers, content=b"")

        assert response.status_code == 400

    def test_too_large(self, client, auth_headers, fake_store):
        response = _upload(client, auth_headers, content=b"x" * (MAX_IMAGE_SIZE_BYTES + 1))

        assert response.status_code == 413
        assert response.json()["error"] == "TooLarge"
        assert fake_store.calls == []

    def test_write_failure(self, client, auth_headers, fake_store):
        fake_store.fail_writes = True

        response = _upload(client, auth_headers)

        assert response.status_code == 502
        assert response.json()["error"] == "WriteFailure"

    def test_misconfigured_bucket(self, client, auth_headers, bucket_config, fake_store):
        broken = StorageGateway(replace(bucket_config, bucket_name="undefined"), fake_store)
        app.dependency_overrides[get_storage_gateway] = lambda: broken

        response = _upload(client, auth_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "ConfigurationError"

    def test_oversized_body_is_not_fully_buffered(self, client, auth_headers, bucket_config, fake_store):
        """Only one byte past the ceiling is read before the upload is rejected."""
        seen_sizes = []

        class RecordingGateway(StorageGateway):
            def store(self, asset):
                seen_sizes.append(asset.size_bytes)
                return super().store(asset)

        app.dependency_overrides[get_storage_gateway] = lambda: RecordingGateway(bucket_config, fake_store)

        response = _upload(client, auth_headers, content=b"x" * (MAX_IMAGE_SIZE_BYTES + 4096))

        assert response.status_code == 413
        assert seen_sizes == [MAX_IMAGE_SIZE_BYTES + 1]
        assert fake_store.calls == []
