"""Mixed storefront workload scenario.

Combines catalog and ordering journeys with weights that model realistic
storefront traffic. This is the recommended scenario for load baselines.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import (
    BrowseCatalog,
    InvalidProductJourney,
    ProductListingJourney,
)
from loadtests.scenarios.ordering import CheckoutJourney, FlashSaleJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload simulating concurrent storefront activity.

    Browsing (45%): product listing reads dominate real traffic.

    Ordering (40%):
    - Checkout against the live catalog
    - Flash sales on scarce stock

    Catalog management (15%):
    - Listing create and delete
    - Rejected incomplete listings
    """

    wait_time = between(1, 3)
    tasks = {
        BrowseCatalog: 45,
        CheckoutJourney: 32,
        FlashSaleJourney: 8,
        ProductListingJourney: 12,
        InvalidProductJourney: 3,
    }
