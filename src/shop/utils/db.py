"""Schema management for relational providers (sqlite, postgresql).

The in-memory provider needs no schema, so both helpers skip it.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

from shop.utils.logging import get_logger

logger = get_logger(__name__)

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _register_models(domain: Domain, provider_name: str) -> None:
    # Touching ``_dao`` builds the SQLAlchemy model for each element on this provider
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider_name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> list[str]:
    """Create tables for every relational provider; returns the provider names touched."""
    touched = []
    with domain.domain_context():
        for name, provider in domain.providers.items():
            if provider.conn_info["provider"] not in _RELATIONAL_PROVIDERS:
                continue

            _register_models(domain, name)
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.create_all(engine)
            touched.append(name)
            logger.info("schema_created", provider=name)

    return touched


def drop_db(domain: Domain) -> list[str]:
    """Drop tables for every relational provider; returns the provider names touched."""
    touched = []
    with domain.domain_context():
        for name, provider in domain.providers.items():
            if provider.conn_info["provider"] not in _RELATIONAL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            touched.append(name)
            logger.info("schema_dropped", provider=name)

    return touched
