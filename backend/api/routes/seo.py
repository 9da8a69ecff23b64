"""
Crawler endpoints.

robots.txt and sitemap.xml are generated from settings and cached for
an hour.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from shared.config import Settings

from ..dependencies import get_app_settings

router = APIRouter()

CACHE_CONTROL = "public, max-age=3600"

DISALLOWED = ["/api/", "/admin/", "/preview-cv", "/*/edit"]

SITEMAP_ROUTES = [
    "/",
    "/profile",
    "/dashboard",
    "/work-experience",
    "/education",
    "/projects",
    "/skills",
    "/certifications",
    "/memberships",
    "/interests",
    "/qualification-equivalence",
    "/professional-summary",
    "/preview-cv",
    "/subscription",
    "/privacy",
    "/terms",
]


def render_robots(site_url: str) -> str:
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED]
    lines += ["", f"Sitemap: {site_url}/sitemap.xml", ""]
    return "\n".join(lines)


def render_sitemap(site_url: str, today: Optional[date] = None) -> str:
    lastmod = (today or date.today()).isoformat()
    entries = [
        "  <url>\n"
        f"    <loc>{site_url}{route}</loc>\n"
        f"    <lastmod>{lastmod}</lastmod>\n"
        "    <changefreq>weekly</changefreq>\n"
        f"    <priority>{'1.0' if route == '/' else '0.8'}</priority>\n"
        "  </url>"
        for route in SITEMAP_ROUTES
    ]
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(entries)
        + "\n</urlset>"
    )


@router.get("/robots.txt")
async def robots(settings: Settings = Depends(get_app_settings)) -> Response:
    return Response(
        render_robots(settings.site_url.rstrip("/")),
        media_type="text/plain",
        headers={"Cache-Control": CACHE_CONTROL},
    )


@router.get("/sitemap.xml")
async def sitemap(settings: Settings = Depends(get_app_settings)) -> Response:
    return Response(
        render_sitemap(settings.site_url.rstrip("/")),
        media_type="application/xml",
        headers={"Cache-Control": CACHE_CONTROL},
    )
