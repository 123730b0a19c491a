from decimal import Decimal

from storefront import Storefront
from storefront.core.config import MockMode
from storefront.models.cart import MaterializedCartLine
from storefront.models.common import Outcome
from storefront.services.cart_service import CartReconciliationService
from storefront.services.cart_store import CartStore

from .conftest import FakeLookup, forbidden_transport, make_settings, product


def build(storage, lookup):
    cart = CartStore(storage)
    return cart, CartReconciliationService(cart, lookup)


async def test_empty_cart(storage):
    _, service = build(storage, FakeLookup([]))

    result = await service.materialize()

    assert result.ok
    assert result.value == []
    assert service.total(result.value) == Decimal("0")


async def test_single_line_total(storage):
    cart, service = build(storage, FakeLookup([product(1, "10.00")]))
    cart.add(1, 2)

    result = await service.materialize()

    assert result.ok
    line = result.value[0]
    assert (line.id, line.quantity, line.name, line.resolved) == (1, 2, "Product 1", True)
    assert service.total(result.value) == Decimal("20.00")


async def test_failed_lookup_degrades_one_line(storage):
    lookup = FakeLookup([product(1, "10.00"), product(2, "5.00")], failing={2})
    cart, service = build(storage, lookup)
    cart.add(1, 1)
    cart.add(2, 3)

    result = await service.materialize()

    assert result.outcome == Outcome.DEGRADED
    assert len(result.value) == 2
    full, bare = result.value
    assert full.resolved and full.price == Decimal("10.00")
    assert not bare.resolved
    assert (bare.id, bare.quantity, bare.price, bare.name) == (2, 3, None, None)
    assert service.total(result.value) == Decimal("10.00")


async def test_order_follows_cart_not_response_timing(storage):
    lookup = FakeLookup(
        [product(1, "1.00"), product(2, "2.00"), product(3, "3.00")],
        delays={1: 0.03, 2: 0.0, 3: 0.01},
    )
    cart, service = build(storage, lookup)
    for product_id in (1, 2, 3):
        cart.add(product_id)

    result = await service.materialize()

    assert [line.id for line in result.value] == [1, 2, 3]
    assert sorted(lookup.calls) == [1, 2, 3]


async def test_lookup_exception_is_contained(storage):
    class ExplodingLookup:
        async def get_product(self, product_id):
            raise RuntimeError("boom")

    cart, service = build(storage, ExplodingLookup())
    cart.add(1, 2)

    result = await service.materialize()

    assert result.is_degraded
    assert result.value[0].resolved is False


async def test_outage_leaves_lines_unpriced(offline_shop):
    offline_shop.cart.add(42, 3)

    result = await offline_shop.cart_view.materialize()

    assert result.is_degraded
    line = result.value[0]
    assert (line.id, line.quantity, line.resolved, line.price, line.name) == (42, 3, False, None, None)
    assert offline_shop.cart_view.total(result.value) == Decimal("0")


async def test_sample_data_is_discarded_by_default(storage):
    cart, service = build(storage, FakeLookup([product(1, "10.00"), product(2, "5.00")], sample={2}))
    cart.add(1)
    cart.add(2, 2)

    result = await service.materialize()

    assert result.is_degraded
    assert [line.resolved for line in result.value] == [True, False]
    assert service.total(result.value) == Decimal("10.00")


async def test_sample_data_kept_when_accepted(storage):
    cart = CartStore(storage)
    lookup = FakeLookup([product(1, "10.00")], sample={1})
    service = CartReconciliationService(cart, lookup, accept_sample_data=True)
    cart.add(1, 2)

    result = await service.materialize()

    assert result.is_degraded
    line = result.value[0]
    assert line.resolved and line.is_mock
    assert service.total(result.value) == Decimal("20.00")


async def test_mock_always_storefront_prices_from_samples(storage):
    settings = make_settings(MockMode.ALWAYS)
    async with Storefront.from_settings(settings, storage=storage, transport=forbidden_transport()) as shop:
        shop.cart.add(7, 2)
        result = await shop.cart_view.materialize()

    assert result.is_degraded
    assert result.value[0].is_mock
    assert result.value[0].price == Decimal("29.99")


async def test_real_lookups_against_api(shop):
    shop.cart.add(1, 2)
    shop.cart.add(5, 1)

    result = await shop.cart_view.materialize()

    assert result.ok
    assert [line.name for line in result.value] == [
        "Wireless Noise-Cancelling Headphones",
        "The Pragmatic Cookbook",
    ]
    assert shop.cart_view.total(result.value) == Decimal("324.93")


async def test_unknown_product_from_api_degrades(shop):
    shop.cart.add(1)
    shop.cart.add(999)

    result = await shop.cart_view.materialize()

    assert result.is_degraded
    assert [line.resolved for line in result.value] == [True, False]


def test_total_ignores_missing_and_non_finite_prices():
    lines = [
        MaterializedCartLine(id=1, quantity=2, price=Decimal("2.50")),
        MaterializedCartLine(id=2, quantity=1, resolved=False),
        MaterializedCartLine.model_construct(id=3, quantity=4, price=Decimal("NaN"), resolved=True),
        MaterializedCartLine.model_construct(id=4, quantity=1, price=Decimal("Infinity"), resolved=True),
        MaterializedCartLine.model_construct(id=5, quantity=1, price="abc", resolved=True),
    ]

    assert CartReconciliationService.total(lines) == Decimal("5.00")

