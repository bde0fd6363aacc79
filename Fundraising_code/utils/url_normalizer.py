# utils/url_normalizer.py
from typing import Optional
from urllib.parse import urljoin


def normalize_url(base: Optional[str], href: Optional[str]) -> Optional[str]:
    """
    Normalize href relative to base. Return None when blank or not a real link.
    """
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith(("javascript:", "#")):
        return None
    if href.startswith("//"):
        href = "https:" + href
    if href.startswith("http://") or href.startswith("https://") or href.startswith("data:"):
        return href
    if not base:
        return href
    try:
        return urljoin(base, href)
    except ValueError:
        return None
