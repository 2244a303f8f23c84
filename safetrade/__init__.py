"""SafeTrade marketplace backend."""
