from __future__ import annotations

import logging

from pqlint_client.clients.base import ApiClient
from pqlint_client.http import ApiError, execute
from pqlint_client.models import LintRule

logger = logging.getLogger(__name__)


class RuleCatalogClient(ApiClient):
    def list_rules(self) -> list[LintRule]:
        url = f"{self.base_url}/lint/rules"
        try:
            response = execute(url, method="GET", headers=self._headers())
            rules = _to_rules(response.data)
        except ApiError as exc:
            logger.error("Failed to retrieve lint rules: %s", exc.message)
            raise

        logger.debug("Retrieved %d lint rules", len(rules))
        return rules


def _to_rules(data: object) -> list[LintRule]:
    if not isinstance(data, list):
        raise ApiError("PQLint API returned invalid rules payload")
    rules: list[LintRule] = []
    for item in data:
        if not isinstance(item, dict) or item.get("id") is None:
            raise ApiError("PQLint API returned a rule without an 'id'")
        rules.append(LintRule.from_dict(item))
    return rules
