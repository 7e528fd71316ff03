from __future__ import annotations

import logging
from typing import Iterable
from urllib.parse import quote, urlencode

from pqlint_client.clients.base import ApiClient
from pqlint_client.http import ApiError, execute
from pqlint_client.models import LintRequest, LintResultItem

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("pq", "tmdl")


class InvalidArgumentError(ValueError):
    pass


class LintClient(ApiClient):
    def lint(
        self,
        code: str,
        subscription_key: str,
        rule_ids: str | Iterable[str] | None = None,
        severity: int | str | None = None,
        format: str | None = "pq",
    ) -> list[LintResultItem]:
        lint_request = build_request(code, subscription_key, rule_ids, severity, format)

        query = urlencode({"subscription-key": subscription_key}, quote_via=quote)
        url = f"{self.base_url}/pq/lint?{query}"
        try:
            response = execute(
                url,
                method="POST",
                headers=self._headers(),
                body=lint_request.to_body(),
            )
            results = _to_results(response.data)
        except ApiError as exc:
            logger.error("Lint request failed: %s", exc.message)
            raise

        logger.debug("Lint found %d issues", len(results))
        return results


def build_request(
    code: str | None,
    subscription_key: str | None,
    rule_ids: str | Iterable[str] | None = None,
    severity: int | str | None = None,
    format: str | None = "pq",
) -> LintRequest:
    if code is None or not code.strip():
        raise InvalidArgumentError("Code parameter cannot be null or empty")
    if subscription_key is None or not subscription_key.strip():
        raise InvalidArgumentError("SubscriptionKey parameter cannot be null or empty")
    if format is not None and format.strip() and format not in SUPPORTED_FORMATS:
        raise InvalidArgumentError(f"Format must be one of: {', '.join(SUPPORTED_FORMATS)}")

    return LintRequest(
        code=code,
        rule_ids=_rule_id_tuple(rule_ids),
        severity=None if severity is None else str(severity),
        format=format,
    )


def _rule_id_tuple(rule_ids: str | Iterable[str] | None) -> tuple[str, ...]:
    if rule_ids is None:
        return ()
    if isinstance(rule_ids, str):
        return (rule_ids,) if rule_ids.strip() else ()
    return tuple(str(rule_id) for rule_id in rule_ids)


def _to_results(data: object) -> list[LintResultItem]:
    if not isinstance(data, list):
        raise ApiError("PQLint API returned invalid lint results payload")
    results: list[LintResultItem] = []
    for item in data:
        if not isinstance(item, dict) or item.get("id") is None:
            raise ApiError("PQLint API returned a lint result without an 'id'")
        results.append(LintResultItem.from_dict(item))
    return results
