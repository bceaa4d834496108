"""Domain models and value helpers for pet health comparison."""
