"""CORS proxy URL resolution.

The proxy prefix is joined to the target by plain string concatenation. The
target URL is not encoded, so targets containing reserved characters may not
survive a query-style proxy intact.
"""

PROXY_RAW_SUFFIXES = ("=", "?", "/")


def resolve_base_url(base_url: str, cors_proxy: str = "") -> str:
    """
    Route a provider base URL through an optional CORS proxy.

    Args:
        base_url: The provider's configured base URL.
        cors_proxy: Global proxy prefix, empty for direct requests.

    Returns:
        ``base_url`` unchanged when no proxy is set, ``proxy + base_url`` when the
        proxy ends with ``=``, ``?`` or ``/``, otherwise ``proxy + "/" + base_url``.
    """
    proxy = (cors_proxy or "").strip()
    if not proxy:
        return base_url
    if proxy.endswith(PROXY_RAW_SUFFIXES):
        return f"{proxy}{base_url}"
    return f"{proxy}/{base_url}"
