from pqlint_client.clients import InvalidArgumentError, LintClient, RuleCatalogClient, build_clients
from pqlint_client.config import ConfigError, load_config
from pqlint_client.http import ApiError
from pqlint_client.models import ClientSettings, LintRequest, LintResultItem, LintRule

__all__ = [
    "ApiError",
    "ClientSettings",
    "ConfigError",
    "InvalidArgumentError",
    "LintClient",
    "LintRequest",
    "LintResultItem",
    "LintRule",
    "RuleCatalogClient",
    "build_clients",
    "load_config",
]
