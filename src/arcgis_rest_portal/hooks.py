import logging
from urllib.parse import urlsplit, urlunsplit

import requests

_log = logging.getLogger(__name__)


def log_response(response: requests.Response, *args, **kwargs):
    """
    Logs every HTTP response at DEBUG level.

    Args:
        response (requests.Response): The HTTP response to handle.

    Returns:
        requests.Response: The original HTTP response.
    """
    _log.debug(
        "Networking: %s response for %s.", response.status_code, _mask_url(response.url)
    )
    return response


def log_response_detailed(response: requests.Response, *args, **kwargs):
    """
    Logs every HTTP response along with the request that produced it.

    Args:
        response (requests.Response): The HTTP response to handle.

    Returns:
        requests.Response: The original HTTP response.
    """
    _log.debug(_describe(response))
    return response


def response_error_logging(response: requests.Response, *args, **kwargs):
    """
    Logs responses whose status is neither 200 nor 302 at WARNING level.

    Args:
        response (requests.Response): The HTTP response to handle.

    Returns:
        requests.Response: The original HTTP response.
    """
    if response.status_code != 200 and response.status_code != 302:
        _log.warning(_describe(response))
        if response.status_code == 403 and response.reason == "FORBIDDEN":
            _log.warning(
                "Networking: A 403 FORBIDDEN response indicates the requests may be "
                "getting blocked. Check any firewalls that may be blocking this."
            )
    return response


def _mask_params(params: str) -> str:
    return "&".join(
        "token=***" if part.startswith("token=") else part for part in params.split("&")
    )


def _mask_url(url: str) -> str:
    if not url or "token=" not in url:
        return url
    parts = urlsplit(url)
    return urlunsplit(parts._replace(query=_mask_params(parts.query)))


def _describe(response: requests.Response) -> str:
    # the token travels in the body of a POST and in the query of a GET
    body = response.request.body
    if isinstance(body, str) and "token=" in body:
        body = _mask_params(body)
    return (
        f"Networking: {response.status_code} response for {_mask_url(response.url)}\n"
        f"Request details:\n"
        f"Method: {response.request.method}\n"
        f"URL: {_mask_url(response.request.url)}\n"
        f"Body: {body}\n"
        f"Response: {response.status_code} {response.reason}\n"
        f"Response Text: {response.text}\n"
    )
