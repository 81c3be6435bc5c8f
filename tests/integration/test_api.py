"""Integration tests for promptpix.api.main — the generation proxy over HTTP.

All tests use the FastAPI TestClient with the provider dependency overridden
by a FakeProvider, so no SDK client is built and no network access occurs.
Endpoints covered:

- ``POST /generate-image`` — validation, configuration, success, error mapping.
- ``POST /api/generate-image`` — alias of the above.
- ``GET /health`` — liveness.
"""

from __future__ import annotations

import pytest

from promptpix.core.provider import ProviderImage

# ---------------------------------------------------------------------------
# Validation tests.
# ---------------------------------------------------------------------------


class TestValidation:
    """Requests rejected before the provider is called."""

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"prompt": ""},
            {"prompt": "   "},
            {"prompt": None},
            {"prompt": 42},
            {"size": "1024x1024", "quality": "hd"},
        ],
    )
    def test_missing_prompt_returns_400(self, test_client, fake_provider, payload):
        resp = test_client.post("/generate-image", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Prompt is required"}
        assert fake_provider.calls == []

    def test_non_object_body_returns_400(self, test_client):
        resp = test_client.post("/generate-image", json=["a red balloon"])
        assert resp.status_code == 400
        assert resp.json() == {"error": "Prompt is required"}

    def test_invalid_json_returns_400(self, test_client):
        resp = test_client.post(
            "/generate-image",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_unsupported_size_returns_400(self, test_client, fake_provider):
        resp = test_client.post("/generate-image", json={"prompt": "x", "size": "640x480"})
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("size:")
        assert fake_provider.calls == []

    def test_unsupported_quality_returns_400(self, test_client, fake_provider):
        resp = test_client.post(
            "/generate-image", json={"prompt": "a red balloon", "quality": "ultra"}
        )
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("quality:")
        assert fake_provider.calls == []


# ---------------------------------------------------------------------------
# Configuration tests.
# ---------------------------------------------------------------------------


class TestConfiguration:
    """Behaviour when the deployment has no API key."""

    @pytest.mark.parametrize("prompt", ["a red balloon", "x", "  padded  "])
    def test_missing_key_returns_500(self, unconfigured_client, prompt):
        resp = unconfigured_client.post("/generate-image", json={"prompt": prompt})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Image provider API key not configured"}


# ---------------------------------------------------------------------------
# Success tests.
# ---------------------------------------------------------------------------


class TestGenerateSuccess:
    def test_returns_url_and_original_prompt(self, test_client):
        resp = test_client.post("/generate-image", json={"prompt": "a red balloon"})
        assert resp.status_code == 200
        assert resp.json() == {
            "imageUrl": "https://cdn.example/x.png",
            "originalPrompt": "a red balloon",
        }

    def test_revised_prompt_included(self, test_client, fake_provider):
        fake_provider.result = ProviderImage(
            url="https://cdn.example/y.png", revised_prompt="a red balloon over a field"
        )
        resp = test_client.post("/generate-image", json={"prompt": "a red balloon"})
        assert resp.json()["revisedPrompt"] == "a red balloon over a field"

    def test_original_prompt_echoed_unchanged(self, test_client, fake_provider):
        resp = test_client.post("/generate-image", json={"prompt": "  A Red Balloon!  "})
        assert resp.json()["originalPrompt"] == "  A Red Balloon!  "
        assert fake_provider.calls[0]["prompt"] == "  A Red Balloon!  "

    def test_size_forwarded_as_dimensions(self, test_client, fake_provider):
        test_client.post(
            "/generate-image", json={"prompt": "x", "size": "1792x1024", "quality": "hd"}
        )
        assert fake_provider.calls[0]["width"] == 1792
        assert fake_provider.calls[0]["height"] == 1024

    def test_api_prefixed_path(self, test_client):
        resp = test_client.post("/api/generate-image", json={"prompt": "a red balloon"})
        assert resp.status_code == 200
        assert resp.json()["imageUrl"] == "https://cdn.example/x.png"

    def test_extra_fields_ignored(self, test_client):
        resp = test_client.post("/generate-image", json={"prompt": "x", "n": 4})
        assert resp.status_code == 200


# ---------------------------------------------------------------------------
# Provider failure tests.
# ---------------------------------------------------------------------------


class TestProviderFailures:
    def test_no_url_returns_500(self, test_client, fake_provider):
        fake_provider.result = ProviderImage(url=None)
        resp = test_client.post("/generate-image", json={"prompt": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate image"}

    def test_empty_data_returns_500(self, test_client, fake_provider):
        fake_provider.result = None
        resp = test_client.post("/generate-image", json={"prompt": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate image"}

    def test_401_maps_to_401(self, test_client, fake_provider, status_error):
        fake_provider.error = status_error(401)
        resp = test_client.post("/generate-image", json={"prompt": "x"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid API key"}

    def test_429_maps_to_429(self, test_client, fake_provider, status_error):
        fake_provider.error = status_error(429)
        resp = test_client.post("/generate-image", json={"prompt": "x"})
        assert resp.status_code == 429
        assert resp.json() == {"error": "Rate limit exceeded. Please try again later."}

    @pytest.mark.parametrize("status", [400, 403, 404, 500, 503])
    def test_other_statuses_map_to_500(self, test_client, fake_provider, status_error, status):
        fake_provider.error = status_error(status)
        resp = test_client.post("/generate-image", json={"prompt": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate image. Please try again."}

    def test_untagged_exception_maps_to_500(self, test_client, fake_provider):
        fake_provider.error = TimeoutError("read timed out")
        resp = test_client.post("/generate-image", json={"prompt": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate image. Please try again."}

    def test_single_attempt(self, test_client, fake_provider, status_error):
        fake_provider.error = status_error(429)
        test_client.post("/generate-image", json={"prompt": "x"})
        assert len(fake_provider.calls) == 1


# ---------------------------------------------------------------------------
# Health endpoint tests.
# ---------------------------------------------------------------------------


class TestHealth:
    def test_health_configured(self, test_client):
        resp = test_client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["provider_configured"] is True
        assert "version" in data

    def test_health_unconfigured(self, unconfigured_client):
        resp = unconfigured_client.get("/health")
        assert resp.json()["provider_configured"] is False
