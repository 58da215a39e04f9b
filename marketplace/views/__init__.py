from marketplace.catalog.api.views.admin_views import AdminProductCreateView
from marketplace.catalog.api.views.category_views import CategoryViewSet, CollegeViewSet
from marketplace.catalog.api.views.product_views import ProductViewSet
from marketplace.ordering.api.views.order_views import OrderViewSet

__all__ = [
    "ProductViewSet",
    "CategoryViewSet",
    "CollegeViewSet",
    "OrderViewSet",
    "AdminProductCreateView",
]
