"""Mixed cross-domain workload scenario.

Combines journeys from both bounded contexts with weights that model
realistic storefront traffic. This is the recommended scenario for load
baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import ProductManagementJourney, StorefrontBrowsingJourney
from loadtests.scenarios.ordering import (
    CartToCheckoutJourney,
    OrderFulfillmentJourney,
    TrackingLookupJourney,
)


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload simulating concurrent storefront activity.

    Catalogue (55%):
    - Storefront browsing: by far the most common
    - Product management: admin activity, fans out change notifications

    Ordering (45%):
    - Cart to checkout: conversion
    - Order fulfillment: admin status updates
    - Tracking lookups and rejected checkouts

    Exercises the DomainContextMiddleware's routing of each request to the
    Ordering or Catalogue domain under load.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        # Catalogue (55%)
        StorefrontBrowsingJourney: 9,
        ProductManagementJourney: 2,
        # Ordering (45%)
        CartToCheckoutJourney: 5,
        OrderFulfillmentJourney: 2,
        TrackingLookupJourney: 2,
    }
