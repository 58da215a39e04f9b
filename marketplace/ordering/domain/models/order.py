import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from marketplace.catalog.domain.models.catalog import Product
from marketplace.ordering.domain.lifecycle import INITIAL_STATUS, STATUS_CHOICES


class Order(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="purchases")
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sales")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="orders")

    # Copied from the product price when the order is placed
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    delivery_address = models.TextField()

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=INITIAL_STATUS)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        db_table = "orders"
        indexes = [
            models.Index(fields=["seller", "-created_at"], name="orders_seller_created_idx"),
            models.Index(fields=["buyer", "-created_at"], name="orders_buyer_created_idx"),
        ]

    def __str__(self):
        return f"Order {str(self.id)[:8]} for {self.product_id} ({self.status})"
