"""Schema management for SQL-backed providers.

The memory provider needs no schema; for sqlite and postgresql every
aggregate, entity and projection table is materialized through its DAO and
then created (or dropped) in one pass via SQLAlchemy metadata.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _materialize_tables(domain: Domain, provider) -> None:
    registries = (
        domain.registry.aggregates,
        domain.registry.entities,
        domain.registry.projections,
    )
    for registry in registries:
        for _, record in registry.items():
            if record.cls.meta_.provider == provider.name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create database schema"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in _SQL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])
            _materialize_tables(domain, provider)
            provider._metadata.create_all(engine)
            logger.info("schema_created", provider=provider.name, tables=len(provider._metadata.tables))


def drop_db(domain: Domain) -> None:
    """Drop database schema"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in _SQL_PROVIDERS:
                continue

            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("schema_dropped", provider=provider.name)
