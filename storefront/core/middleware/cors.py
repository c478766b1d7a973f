"""CORS configuration: explicit allowlist plus storefront subdomains."""

import re

from storefront.core.config import settings


def storefront_origin_pattern(app_domain: str) -> re.Pattern[str]:
    """Match https://<app_domain> and every https://<slug>.<app_domain>."""
    return re.compile(rf"^https://([a-z0-9-]+\.)?{re.escape(app_domain)}$")


def get_cors_config() -> dict:
    """Return CORS middleware kwargs for FastAPI."""
    config = {
        "allow_origins": settings.allowed_origins_list,
        "allow_credentials": False,
        "allow_methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        "allow_headers": [
            "Authorization",
            "Content-Type",
            "X-Request-Id",
        ],
    }
    if settings.ENVIRONMENT != "development":
        config["allow_origin_regex"] = storefront_origin_pattern(settings.APP_DOMAIN).pattern
    return config
