import os
from pathlib import Path

import requests
from dotenv import load_dotenv

# Try streamlit_app/.env first, then fall back to project root
streamlit_app_env = Path(__file__).parent / ".env"
project_root_env = Path(__file__).parent.parent / ".env"

if streamlit_app_env.exists():
    load_dotenv(dotenv_path=streamlit_app_env)
elif project_root_env.exists():
    load_dotenv(dotenv_path=project_root_env)
else:
    load_dotenv()

API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")


class ApiError(Exception):
    """Raised for any 4xx/5xx; ``message`` is the server's ``error`` string."""

    def __init__(self, status_code, message):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def api_request(method, endpoint, token=None, json=None, params=None):
    headers = {}

    if token:
        headers["Authorization"] = f"Bearer {token}"

    response = requests.request(
        method=method,
        url=f"{API_BASE_URL}{endpoint}",
        headers=headers,
        json=json,
        params=params,
        timeout=10,
    )

    if response.status_code >= 400:
        try:
            body = response.json()
            message = body.get("error") or body.get("detail") or response.text
        except ValueError:
            message = response.text
        raise ApiError(response.status_code, message)

    return response.json()
