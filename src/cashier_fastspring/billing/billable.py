"""Operations on billable owners (users, teams...) holding a FastSpring account."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from cashier_fastspring.errors.exceptions import CustomerResolutionFailure

if TYPE_CHECKING:
    from cashier_fastspring.billing.subscription_builder import SubscriptionBuilder
    from cashier_fastspring.integrations.fastspring_client import FastspringClient

logger = logging.getLogger(__name__)


class BillableOwner(Protocol):
    fastspring_id: str | None
    email: str


class CustomerStore(Protocol):
    async def save(self, owner: Any) -> None: ...


def fastspring_contact(owner: BillableOwner) -> dict[str, Any]:
    """Contact block of the account payload, without empty fields."""
    contact = {
        "first": getattr(owner, "first_name", None),
        "last": getattr(owner, "last_name", None),
        "email": owner.email,
        "company": getattr(owner, "company", None),
        "phone": getattr(owner, "phone", None),
    }
    return {key: value for key, value in contact.items() if value}


def account_payload(owner: BillableOwner) -> dict[str, Any]:
    payload: dict[str, Any] = {"contact": fastspring_contact(owner)}
    for key in ("language", "country"):
        value = getattr(owner, key, None)
        if value:
            payload[key] = value
    return payload


async def create_as_fastspring_customer(
    owner: BillableOwner,
    client: FastspringClient,
    store: CustomerStore | None = None,
    options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create the owner's FastSpring account and remember its id.

    Raises:
        FastspringClientError: FastSpring rejected the account.
    """
    response = await client.create_account(options or account_payload(owner))
    account_id = response.get("account")
    if not account_id:
        raise CustomerResolutionFailure("FastSpring did not return an account id", details=response)

    owner.fastspring_id = account_id
    if store is not None:
        await store.save(owner)
    logger.info("Created FastSpring account %s for %s", account_id, owner.email)
    return response


async def update_as_fastspring_customer(
    owner: BillableOwner,
    client: FastspringClient,
    options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Push the owner's current contact details to its FastSpring account."""
    if not owner.fastspring_id:
        raise ValueError("Owner has no FastSpring account yet")
    return await client.update_account(owner.fastspring_id, options or account_payload(owner))


def new_subscription(
    owner: BillableOwner,
    name: str,
    plan: str,
    client: FastspringClient,
    store: CustomerStore | None = None,
) -> SubscriptionBuilder:
    """Start building a subscription for ``owner``."""
    from cashier_fastspring.billing.subscription_builder import SubscriptionBuilder

    return SubscriptionBuilder(owner, name, plan, client, store=store)
