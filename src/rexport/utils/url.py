"""
URL construction utilities.

Building remote API URLs and credentialed push URLs.
"""

from urllib.parse import quote, urlsplit, urlunsplit


def construct_api_url(base_url: str, endpoint: str) -> str:
    """
    Join a base URL and an API endpoint without doubling slashes.

    Args:
        base_url: The base URL (e.g. https://host or https://host/code)
        endpoint: The API endpoint (e.g. /api/v1/repos)

    Returns:
        Full API URL
    """
    base_url = base_url.rstrip("/")
    endpoint = endpoint or ""

    if not endpoint.startswith("/"):
        endpoint = "/" + endpoint

    return f"{base_url}{endpoint}"


def embed_credentials(url: str, username: str, password: str) -> str:
    """
    Return a copy of ``url`` with ``username:password`` as its userinfo.

    Any userinfo already present is replaced. Both parts are percent-encoded
    so tokens containing reserved characters stay a valid URL.

    Raises:
        ValueError: If the URL has no scheme or host
    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        raise ValueError(f"Invalid remote URL: {url!r}")

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    if parts.port is not None:
        host = f"{host}:{parts.port}"

    userinfo = f"{quote(username, safe='')}:{quote(password, safe='')}"
    return urlunsplit(
        (parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment)
    )
