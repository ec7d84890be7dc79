"""API client functions for the FaaS gateway."""

import logging
from typing import Any

import requests

from faasctl.exceptions import GatewayError, ResourceNotFoundError
from faasctl.lib.output import warning

logger = logging.getLogger(__name__)

FUNCTIONS_PATH = "/system/functions"
SECRETS_PATH = "/system/secrets"

UNAUTHORIZED_MESSAGE = (
    "unauthorized access, set gateway.username and gateway.password for this server"
)
INSECURE_MESSAGE = (
    "WARNING! Communication is not secure, please consider using HTTPS. "
    "Letsencrypt.org offers free SSL/TLS certificates."
)


class GatewayClient:
    """
    Thin client for the gateway REST API.

    Parameters
    ----------
    gateway : str
        Gateway URL starting with http(s)://.
    timeout : float, optional
        Request timeout in seconds, by default 60.
    tls_insecure : bool, optional
        Skip TLS verification and the plain-HTTP warning, by default False.
    username : str or None, optional
        Basic auth user name.
    password : str or None, optional
        Basic auth password.

    Examples
    --------
    >>> client = GatewayClient("http://127.0.0.1:8080")
    >>> client.list_functions()
    [{'name': 'nodejs-echo', 'image': 'alexellis/faas-nodejs-echo', ...}]
    """

    def __init__(
        self,
        gateway: str,
        timeout: float = 60,
        tls_insecure: bool = False,
        username: str | None = None,
        password: str | None = None,
    ):
        self.gateway = gateway.rstrip("/")
        self.timeout = timeout
        self.tls_insecure = tls_insecure
        self.auth = (username, password) if username and password else None

        if not tls_insecure and not self.gateway.startswith("https"):
            warning(INSECURE_MESSAGE)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.gateway}{path}"
        logger.debug("%s %s", method, url)
        try:
            return requests.request(
                method,
                url,
                timeout=self.timeout,
                auth=self.auth,
                verify=not self.tls_insecure,
                **kwargs,
            )
        except requests.RequestException as e:
            raise GatewayError(f"cannot connect to gateway on URL: {self.gateway}: {e}")

    def _unexpected(self, response: requests.Response) -> GatewayError:
        return GatewayError(
            f"server returned unexpected status code: {response.status_code} - {response.text}",
            status_code=response.status_code,
        )

    def deploy_function(
        self,
        spec: dict[str, Any],
        update: bool = False,
    ) -> str:
        """Create or update a function.

        With ``update`` the function is updated in place with PUT, otherwise
        it is created with POST.

        Parameters
        ----------
        spec : dict[str, Any]
            Deployment request body; ``spec["service"]`` is the function name.
        update : bool, optional
            Rolling update instead of create, by default False.

        Returns
        -------
        str
            Public URL of the deployed function.

        Raises
        ------
        GatewayError
            If the gateway rejects the request.
        """
        name = spec["service"]
        method = "PUT" if update else "POST"
        response = self._request(method, FUNCTIONS_PATH, json=spec)

        if response.status_code in (200, 201, 202):
            return f"{self.gateway}/function/{name}"
        if response.status_code == 401:
            raise GatewayError(UNAUTHORIZED_MESSAGE, status_code=401)
        if update and response.status_code == 404:
            raise ResourceNotFoundError(f"function {name} not found, deploy it before updating")
        raise self._unexpected(response)

    def delete_function(self, name: str, missing_ok: bool = False) -> bool:
        """Remove a function.

        Parameters
        ----------
        name : str
            Function name.
        missing_ok : bool, optional
            Return False instead of raising when the function does not exist.

        Returns
        -------
        bool
            True if the function was removed, False if it did not exist.

        Raises
        ------
        ResourceNotFoundError
            If the function does not exist and ``missing_ok`` is False.
        GatewayError
            For any other failure.
        """
        response = self._request("DELETE", FUNCTIONS_PATH, json={"functionName": name})

        if response.status_code in (200, 202):
            return True
        if response.status_code == 404:
            if missing_ok:
                return False
            raise ResourceNotFoundError(f"No existing function to remove: {name}")
        if response.status_code == 401:
            raise GatewayError(UNAUTHORIZED_MESSAGE, status_code=401)
        raise self._unexpected(response)

    def list_functions(self) -> list[dict[str, Any]]:
        """List deployed functions.

        Returns
        -------
        list[dict[str, Any]]
            Function status objects as returned by the gateway.
        """
        response = self._request("GET", FUNCTIONS_PATH)
        return self._json_list(response)

    def list_secrets(self) -> list[dict[str, Any]]:
        """List secrets known to the gateway.

        Returns
        -------
        list[dict[str, Any]]
            Secret objects, each with at least a ``name`` key.
        """
        response = self._request("GET", SECRETS_PATH)
        return self._json_list(response)

    def remove_secret(self, name: str) -> None:
        """Remove a secret by name.

        Raises
        ------
        ResourceNotFoundError
            If the secret does not exist.
        GatewayError
            For any other failure.
        """
        response = self._request("DELETE", SECRETS_PATH, json={"name": name})

        if response.status_code in (200, 202):
            return
        if response.status_code == 404:
            raise ResourceNotFoundError(f"unable to find secret: {name}")
        if response.status_code == 401:
            raise GatewayError(UNAUTHORIZED_MESSAGE, status_code=401)
        raise self._unexpected(response)

    def _json_list(self, response: requests.Response) -> list[dict[str, Any]]:
        if response.status_code == 401:
            raise GatewayError(UNAUTHORIZED_MESSAGE, status_code=401)
        if response.status_code not in (200, 202):
            raise self._unexpected(response)

        try:
            result = response.json()
        except ValueError as e:
            raise GatewayError(f"cannot parse result from gateway on URL: {self.gateway}: {e}")
        return result or []


def build_deploy_spec(
    name: str,
    image: str,
    network: str,
    fprocess: str = "",
    env_vars: dict[str, str] | None = None,
    labels: dict[str, str] | None = None,
    constraints: list[str] | None = None,
    secrets: list[str] | None = None,
    limits: dict[str, str] | None = None,
    requests_: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build the JSON body of a deploy request.

    Parameters
    ----------
    name : str
        Function name.
    image : str
        Image to run.
    network : str
        Network to attach the function to.
    fprocess : str, optional
        Process run by the watchdog; sent as ``envProcess``.
    env_vars, labels : dict, optional
        Environment variables and labels.
    constraints, secrets : list, optional
        Placement constraints and secret names.
    limits, requests_ : dict, optional
        Resource limits and requests.

    Returns
    -------
    dict[str, Any]
        Request body.
    """
    spec = {
        "service": name,
        "image": image,
        "network": network,
        "envProcess": fprocess,
        "envVars": env_vars or {},
        "constraints": constraints or [],
        "secrets": secrets or [],
        "labels": labels or {},
    }
    if limits:
        spec["limits"] = dict(limits)
    if requests_:
        spec["requests"] = dict(requests_)
    return spec
