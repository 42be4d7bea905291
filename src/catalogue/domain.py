"""Catalogue bounded context — products and categories the storefront sells."""

import structlog
from protean.domain import Domain

logger = structlog.get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
