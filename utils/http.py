from typing import Any, Dict

import requests


def auth_headers(access_token: str) -> Dict[str, str]:
    """
    Build bearer-token headers for the CRM REST API.
    """
    return {
        "Authorization": f"Bearer {access_token}",
        "Accept": "application/json",
    }


def http_get(
    url: str,
    headers: Dict[str, str] = None,
    params: Dict[str, Any] = None,
    timeout: float = 60,
) -> Any:
    """
    Perform HTTP GET and return the decoded JSON body.
    """
    headers = headers or {}
    params = params or {}
    response = requests.get(url, headers=headers, params=params, timeout=timeout)
    response.raise_for_status()
    return response.json()


def http_post(
    url: str,
    payload: Dict[str, Any],
    headers: Dict[str, str] = None,
    timeout: float = 60,
) -> Any:
    """
    Perform HTTP POST with a JSON body and return the decoded JSON body.
    """
    headers = headers or {}
    response = requests.post(url, headers=headers, json=payload, timeout=timeout)
    response.raise_for_status()
    return response.json()
