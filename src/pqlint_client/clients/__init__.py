from __future__ import annotations

from pqlint_client.clients.base import ApiClient
from pqlint_client.clients.lint import SUPPORTED_FORMATS, InvalidArgumentError, LintClient
from pqlint_client.clients.rules import RuleCatalogClient
from pqlint_client.models import ClientSettings


def build_clients(settings: ClientSettings | None = None) -> tuple[RuleCatalogClient, LintClient]:
    settings = settings or ClientSettings()
    return RuleCatalogClient(settings), LintClient(settings)


__all__ = [
    "ApiClient",
    "InvalidArgumentError",
    "LintClient",
    "RuleCatalogClient",
    "SUPPORTED_FORMATS",
    "build_clients",
]
