from prometheus_client import Counter, Histogram


# Order Metrics
orders_placed_total = Counter(
    "campus_orders_placed_total", "Total orders placed", ["outcome", "product_marked_sold"]
)
order_value = Histogram(
    "campus_order_value",
    "Order value distribution",
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000, float("inf")],
)
order_status_updates_total = Counter(
    "campus_order_status_updates_total", "Order status changes made by sellers", ["status", "outcome"]
)
