"""Tests for health check and crawler endpoints."""

from datetime import date

from api.routes.seo import DISALLOWED, SITEMAP_ROUTES, render_robots, render_sitemap


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_health_response_structure(self, client):
        """Health response should have correct structure."""
        data = client.get("/api/health").json()
        assert set(data.keys()) == {"status", "version"}


class TestRobots:
    def test_render(self):
        text = render_robots("https://cv.example")
        assert text.startswith("User-agent: *\nAllow: /\n")
        for path in DISALLOWED:
            assert f"Disallow: {path}" in text
        assert "Sitemap: https://cv.example/sitemap.xml" in text

    def test_endpoint(self, client):
        response = client.get("/robots.txt")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.headers["cache-control"] == "public, max-age=3600"
        assert "Sitemap: https://simple-cv-builder.com/sitemap.xml" in response.text


class TestSitemap:
    def test_render(self):
        xml = render_sitemap("https://cv.example", today=date(2026, 1, 2))
        assert xml.count("<url>") == len(SITEMAP_ROUTES)
        assert "<loc>https://cv.example/</loc>" in xml
        assert "<lastmod>2026-01-02</lastmod>" in xml
        assert "<priority>1.0</priority>" in xml
        assert "<priority>0.8</priority>" in xml

    def test_endpoint(self, client):
        response = client.get("/sitemap.xml")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert response.headers["cache-control"] == "public, max-age=3600"
        assert response.text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
