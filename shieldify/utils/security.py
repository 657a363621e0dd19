from urllib.parse import urlparse, urljoin

from flask import request


def is_safe_url(target: str) -> bool:
    """
    Check that a redirect target stays on this host

    Args:
        target: URL or path taken from the ``next`` parameter

    Returns:
        True if the target is an http(s) URL on the current host
    """
    if not target:
        return False

    ref_url = urlparse(request.host_url)
    test_url = urlparse(urljoin(request.host_url, target))

    return (test_url.scheme in ('http', 'https') and
            ref_url.netloc == test_url.netloc)
