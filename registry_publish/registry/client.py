"""REST client for the registry's hosting platform.

Only the three calls the publish workflow needs: look up the user's fork,
create it, and open the pull request against the canonical repository.
"""

import http.client
import json
import urllib.error
import urllib.request
from typing import Any

from registry_publish.config.models import PublishConfig, RegistryConfig
from registry_publish.credentials import Credentials
from registry_publish.exceptions import NetworkError


def search_fork(node: Any) -> bool:
    """Recursively look for a boolean ``fork`` field.

    An object's own ``fork`` field wins over anything nested below it;
    otherwise nested values are searched in order and the first ``true``
    found is returned.
    """
    if isinstance(node, dict):
        value = node.get("fork")
        if isinstance(value, bool):
            return value
        return any(search_fork(child) for child in node.values())
    if isinstance(node, list):
        return any(search_fork(child) for child in node)
    return False


def read_fork_flag(payload: Any) -> bool:
    """Decide from a repository lookup response whether it is a fork.

    The repository object documents ``fork`` at the top level. If it is not
    there, fall back to a compatibility scan of the whole response.
    """
    if isinstance(payload, dict) and isinstance(payload.get("fork"), bool):
        return bool(payload["fork"])
    return search_fork(payload)


class RegistryClient:
    """Client for the hosting platform API, scoped to one registry repository."""

    def __init__(
        self,
        registry: RegistryConfig,
        timeout: int = 30,
        user_agent: str = "registry-publish",
    ) -> None:
        self.registry = registry
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, config: PublishConfig) -> "RegistryClient":
        return cls(
            config.registry,
            timeout=config.timeouts.http,
            user_agent=config.user_agent,
        )

    @property
    def upstream_path(self) -> str:
        return f"/repos/{self.registry.owner}/{self.registry.repo}"

    def _headers(self, creds: Credentials) -> dict[str, str]:
        return {
            "Authorization": f"Basic {creds.auth_token}",
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "*/*",
            "User-Agent": self.user_agent,
        }

    def _request(
        self,
        method: str,
        path: str,
        creds: Credentials,
        body: dict[str, str] | None = None,
    ) -> bytes:
        """Send one request and return the raw response body.

        Raises:
            NetworkError: On HTTP error status, transport failure or timeout
        """
        url = f"{self.registry.api_url}{path}"
        data = None
        if method != "GET":
            data = json.dumps(body).encode("utf-8") if body is not None else b""

        req = urllib.request.Request(
            url,
            data=data,
            headers=self._headers(creds),
            method=method,
        )

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                payload: bytes = response.read()
                return payload
        except urllib.error.HTTPError as e:
            raise NetworkError(
                f"{method} {url} failed with HTTP {e.code}",
                details=str(e.reason),
                fix_hint="Check your user name and password" if e.code == 401 else None,
            ) from e
        except TimeoutError as e:
            raise NetworkError(
                f"{method} {url} timed out after {self.timeout}s",
            ) from e
        # Dropped connections surface as http.client or socket errors, not URLError
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise NetworkError(
                f"{method} {url} failed",
                details=str(getattr(e, "reason", None) or e) or type(e).__name__,
                fix_hint="Check network connectivity",
            ) from e

    def fork_exists(self, creds: Credentials) -> bool:
        """Check whether the user already owns a fork of the registry.

        Transport and parse failures count as "no fork yet".
        """
        try:
            raw = self._request("GET", f"/repos/{creds.username}/{self.registry.repo}", creds)
            return read_fork_flag(json.loads(raw.decode("utf-8")))
        except (NetworkError, UnicodeDecodeError, json.JSONDecodeError, RecursionError):
            return False

    def create_fork(self, creds: Credentials) -> None:
        """Fork the canonical registry into the user's namespace.

        Raises:
            NetworkError: If the request fails
        """
        self._request("POST", f"{self.upstream_path}/forks", creds)

    def create_pull_request(self, creds: Credentials, package_name: str) -> str | None:
        """Open the pull request that adds ``package_name``.

        Returns:
            The pull request's web URL when the response carries one

        Raises:
            NetworkError: If the request fails
        """
        body = {
            "title": f"Add package {package_name}",
            "head": f"{creds.username}:{self.registry.branch}",
            "base": self.registry.branch,
        }
        raw = self._request("POST", f"{self.upstream_path}/pulls", creds, body=body)
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None
        if isinstance(data, dict) and isinstance(data.get("html_url"), str):
            return str(data["html_url"])
        return None
