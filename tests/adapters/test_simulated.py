from __future__ import annotations

import logging
from itertools import count

import pytest

from tiersync.adapters.simulated import SimulatedBillingClient
from tiersync.domain.ports.billing import BillingProviderClient


def test_simulated_client_satisfies_port() -> None:
    assert isinstance(SimulatedBillingClient(), BillingProviderClient)


def test_simulated_ids_are_prefixed_and_unique() -> None:
    client = SimulatedBillingClient()

    product_ids = {
        client.create_product(name="Basic", description="", metadata={}) for _ in range(5)
    }
    price_id = client.create_price(
        product_id="prod_sim_x", unit_amount=200, currency="eur", metadata={}
    )

    assert len(product_ids) == 5
    assert all(product_id.startswith("prod_sim_") for product_id in product_ids)
    assert price_id.startswith("price_sim_")


def test_simulated_client_uses_injected_suffix() -> None:
    counter = count(1)
    client = SimulatedBillingClient(id_suffix=lambda: str(next(counter)))

    assert client.create_product(name="A", description="", metadata={}) == "prod_sim_1"
    assert (
        client.create_price(product_id="prod_sim_1", unit_amount=1, currency="eur", metadata={})
        == "price_sim_2"
    )


def test_simulated_writes_succeed_and_log(caplog: pytest.LogCaptureFixture) -> None:
    client = SimulatedBillingClient()

    with caplog.at_level(logging.INFO, logger="tiersync.adapters.simulated"):
        client.update_product("prod_sim_1", name="Basic", description="", metadata={})
        client.archive_product("prod_sim_1", metadata={"tierId": "t"})

    assert len(caplog.records) == 2
    assert all(record.getMessage().startswith("[simulated]") for record in caplog.records)


def test_simulated_products_are_always_active() -> None:
    status = SimulatedBillingClient().retrieve_product("prod_anything")

    assert status.product_id == "prod_anything"
    assert status.active
