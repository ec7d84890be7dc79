"""Gateway REST API client."""

from faasctl.gateway.api import GatewayClient, build_deploy_spec

__all__ = ["GatewayClient", "build_deploy_spec"]
