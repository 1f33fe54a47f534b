"""Marketplace bounded context.

A single domain owns every aggregate because placing an order reads and
writes users, products and cart rows inside one unit of work.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
