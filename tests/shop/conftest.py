import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def shop_bed():
    from shop.domain import shop

    bed = DomainFixture(shop)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shop_bed):
    """Run every test inside the shop domain context and wipe stores afterwards."""
    with shop_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()
