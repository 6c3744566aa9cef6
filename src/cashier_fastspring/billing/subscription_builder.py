"""Fluent builder for FastSpring subscription sessions."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from cashier_fastspring.billing.billable import (
    BillableOwner,
    CustomerStore,
    create_as_fastspring_customer,
)
from cashier_fastspring.errors.exceptions import CustomerResolutionFailure
from cashier_fastspring.integrations.fastspring_client import FastspringClientError

if TYPE_CHECKING:
    from cashier_fastspring.integrations.fastspring_client import FastspringClient

logger = logging.getLogger(__name__)


def replace_recursive(base: Any, override: Any) -> Any:
    """Merge ``override`` into ``base``; override wins on every conflicting key.

    Mappings are merged key by key and lists index by index, so an override
    of ``{"items": [{"quantity": 3}]}`` only changes the first item's quantity.
    Neither argument is modified.
    """
    if isinstance(base, dict) and isinstance(override, dict):
        merged = copy.deepcopy(base)
        for key, value in override.items():
            merged[key] = replace_recursive(merged[key], value) if key in merged else copy.deepcopy(value)
        return merged

    if isinstance(base, list) and isinstance(override, list):
        merged = copy.deepcopy(base)
        for index, value in enumerate(override):
            if index < len(merged):
                merged[index] = replace_recursive(merged[index], value)
            else:
                merged.append(copy.deepcopy(value))
        return merged

    return copy.deepcopy(override)


def strip_empty(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop top-level keys whose value is empty.

    Empty means falsy (None, "", 0, False, [] or {}) or the string "0".
    """
    return {key: value for key, value in payload.items() if value and value != "0"}


class SubscriptionBuilder:
    """Collects the options of a new subscription and creates its session."""

    def __init__(
        self,
        owner: BillableOwner,
        name: str,
        plan: str,
        client: FastspringClient,
        store: CustomerStore | None = None,
    ) -> None:
        self.owner = owner
        self.name = name
        self.plan = plan
        self.client = client
        self.store = store
        self._quantity = 1
        self._coupon: str | None = None
        self._contact: dict[str, Any] | None = None
        self._overrides: list[dict[str, Any]] = []

    def quantity(self, quantity: int) -> SubscriptionBuilder:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError(f"quantity must be a positive integer, got {quantity!r}")
        self._quantity = quantity
        return self

    def with_coupon(self, coupon: str | None) -> SubscriptionBuilder:
        self._coupon = coupon
        return self

    def with_contact(self, contact: dict[str, Any] | None) -> SubscriptionBuilder:
        """Prefill the checkout contact (email, firstName, lastName, company, phone)."""
        self._contact = contact
        return self

    def payload(self, override: dict[str, Any]) -> SubscriptionBuilder:
        """Append a fragment merged over the generated payload, in call order."""
        self._overrides.append(override)
        return self

    def build_payload(self, account_id: str | None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "account": account_id,
            "items": [
                {
                    "product": self.plan,
                    "quantity": self._quantity,
                },
            ],
            "tags": {
                "name": self.name,
            },
            "coupon": self._coupon,
        }

        if self._contact and isinstance(self._contact, dict):
            payload["contact"] = self._contact

        payload = strip_empty(payload)
        for override in self._overrides:
            payload = strip_empty(replace_recursive(payload, override))
        return payload

    async def resolve_account_id(self) -> str | None:
        """Return the owner's FastSpring id, creating the account if needed.

        When FastSpring reports that an account already exists for the owner's
        e-mail, that account is looked up and its id stored on the owner.

        Raises:
            CustomerResolutionFailure: Account creation failed for another reason.
        """
        if self.owner.fastspring_id:
            return self.owner.fastspring_id

        try:
            await create_as_fastspring_customer(self.owner, self.client, self.store)
        except FastspringClientError as exc:
            # The error body names the offending field; the message text is not stable
            if "email" not in exc.error:
                raise CustomerResolutionFailure(
                    f"FastSpring refused to create an account for {self.owner.email}",
                    details=exc.body,
                ) from exc
            await self._adopt_existing_account()

        return self.owner.fastspring_id

    async def _adopt_existing_account(self) -> None:
        response = await self.client.get_accounts(email=self.owner.email)
        accounts = response.get("accounts") or []
        if not accounts:
            logger.warning("No FastSpring account found for %s", self.owner.email)
            return

        account = accounts[0]
        self.owner.fastspring_id = account["id"] if isinstance(account, dict) else account
        if self.store is not None:
            await self.store.save(self.owner)
        logger.info("Linked existing FastSpring account %s to %s", self.owner.fastspring_id, self.owner.email)

    async def create(self) -> dict[str, Any]:
        """Create the FastSpring session for this subscription."""
        account_id = await self.resolve_account_id()
        return await self.client.create_session(self.build_payload(account_id))
