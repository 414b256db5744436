# client/api.py
"""
Thin HTTP client for the registration API.

A ``requests.Session`` keeps the session cookie between calls, so calling
``login`` once is enough for every guarded route afterwards.
"""
import logging

import requests

logger = logging.getLogger("sportsreg.client")

DEFAULT_BASE_URL = "http://localhost:8000/api"


class ApiError(Exception):
    """Error answer from the API, carrying its ``statusCode`` and ``statusMessage``."""

    def __init__(self, status_code, status_message, errors=None):
        super().__init__(status_message)
        self.status_code = status_code
        self.status_message = status_message
        self.errors = errors

    def __str__(self):
        return f"{self.status_code}: {self.status_message}"


class ApiClient:
    def __init__(self, base_url=DEFAULT_BASE_URL, session=None, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, method):
        if method in ("GET", "HEAD", "OPTIONS"):
            return {}
        # Django wants the CSRF token back on unsafe methods of a cookie session
        token = self.session.cookies.get("csrftoken")
        return {"X-CSRFToken": token} if token else {}

    def request(self, method, path, params=None, json=None):
        method = method.upper()
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        try:
            response = self.session.request(
                method,
                self.url(path),
                params=params or None,
                json=json,
                headers=self._headers(method),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(0, str(e)) from e

        if response.ok:
            if not response.content:
                return None
            if "application/json" not in response.headers.get("Content-Type", ""):
                return response.text
            return response.json()

        raise self._error_from(response)

    @staticmethod
    def _error_from(response):
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = body.get("statusMessage") or body.get("detail") or response.reason
            return ApiError(body.get("statusCode", response.status_code), message, body.get("errors"))
        return ApiError(response.status_code, response.reason or "Request failed")

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, json=None):
        return self.request("POST", path, json=json)

    def put(self, path, json=None):
        return self.request("PUT", path, json=json)

    def delete(self, path):
        return self.request("DELETE", path)

    # -----------------------------------------
    # SESSION
    # -----------------------------------------
    def login(self, username, password):
        return self.post("auth/login", {"username": username, "password": password})

    def logout(self):
        return self.post("auth/logout")

    def me(self):
        return self.get("auth/me")
