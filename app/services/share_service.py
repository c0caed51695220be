from typing import Dict

from app.core.config import settings


def _frontend_base() -> str:
    return settings.FRONTEND_URL.rstrip("/")


def public_url(slug: str) -> str:
    return f"{_frontend_base()}/w/{slug}"


def build_share_options(slug: str, waitlist_id: str) -> Dict[str, str]:
    """Link plus copy-paste embed snippets shown in the dashboard share panel."""
    url = public_url(slug)
    base = _frontend_base()
    iframe_code = (
        "<iframe \n"
        f'  src="{url}?embed=true" \n'
        '  width="100%" \n'
        '  height="500" \n'
        '  frameborder="0"\n'
        '  style="border-radius: 8px; max-width: 600px;"\n'
        "></iframe>"
    )
    script_code = (
        "<!-- Waitlist Widget -->\n"
        f'<script src="{base}/sdk/waitlist.js"></script>\n'
        "<script>\n"
        "  WaitlistWidget.init({\n"
        f'    slug: "{slug}",\n'
        f'    waitlistId: "{waitlist_id}",\n'
        '    container: "#waitlist-container"\n'
        "  });\n"
        "</script>\n"
        '<div id="waitlist-container"></div>'
    )
    return {"public_url": url, "iframe_code": iframe_code, "script_code": script_code}
