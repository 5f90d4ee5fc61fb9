from prometheus_client import Counter

# Business Metrics
neocoffee_orders_created_total = Counter(
    "neocoffee_orders_created_total",
    "Total orders accepted through checkout",
)

neocoffee_order_items_created_total = Counter(
    "neocoffee_order_items_created_total",
    "Total order line items accepted through checkout",
)

neocoffee_login_attempts_total = Counter(
    "neocoffee_login_attempts_total",
    "Admin login attempts",
    ["outcome"],  # Labels: 'success', 'failed'
)
