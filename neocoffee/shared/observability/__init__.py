from .setup import setup_observability
from .metrics import (
    neocoffee_orders_created_total,
    neocoffee_order_items_created_total,
    neocoffee_login_attempts_total,
)
