import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from .category import Category

PRODUCT_ACTIVE = "active"
PRODUCT_SOLD = "sold"


class Product(models.Model):
    STATUS_CHOICES = [
        (PRODUCT_ACTIVE, "Active"),
        (PRODUCT_SOLD, "Sold"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])

    # Ordered storage paths in the product-images bucket, first one is the cover
    image_paths = models.JSONField(default=list, blank=True)

    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="products")
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, related_name="products")

    # Flipped to "sold" as a side effect of placing an order
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PRODUCT_ACTIVE)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        db_table = "products"
        indexes = [
            models.Index(fields=["status", "-created_at"], name="products_status_created_idx"),
            models.Index(fields=["seller", "-created_at"], name="products_seller_created_idx"),
            models.Index(fields=["category", "status"], name="products_category_status_idx"),
        ]

    def __str__(self):
        return self.title
