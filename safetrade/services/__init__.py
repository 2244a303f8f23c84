"""Business-logic layer: services own the transaction boundary."""
