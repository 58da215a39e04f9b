from django.contrib import admin

from .models import Category, College, Order, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "id")
    search_fields = ("name",)


@admin.register(College)
class CollegeAdmin(admin.ModelAdmin):
    list_display = ("name", "id")
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("title", "seller", "category", "price", "status", "created_at")
    list_filter = ("status", "category", "created_at")
    search_fields = ("title", "description", "seller__email")
    readonly_fields = ("id", "created_at", "updated_at")

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("seller", "category")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "product", "buyer", "seller", "status", "total_amount", "created_at")
    list_filter = ("status", "created_at", "updated_at")
    search_fields = ("id", "buyer__email", "seller__email", "product__title")
    readonly_fields = ("id", "total_amount", "created_at", "updated_at")

    actions = ["mark_confirmed", "mark_shipped", "mark_delivered"]

    def mark_confirmed(self, request, queryset):
        queryset.update(status="confirmed")
        self.message_user(request, f"{queryset.count()} orders marked as confirmed.")

    mark_confirmed.short_description = "Mark selected orders as confirmed"

    def mark_shipped(self, request, queryset):
        queryset.update(status="shipped")
        self.message_user(request, f"{queryset.count()} orders marked as shipped.")

    mark_shipped.short_description = "Mark selected orders as shipped"

    def mark_delivered(self, request, queryset):
        queryset.update(status="delivered")
        self.message_user(request, f"{queryset.count()} orders marked as delivered.")

    mark_delivered.short_description = "Mark selected orders as delivered"
