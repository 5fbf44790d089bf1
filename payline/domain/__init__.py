"""Domain layer: order items, provider order lines, money and errors."""
