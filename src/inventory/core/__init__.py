"""Core domain logic: lifecycle rules, query pipeline, services."""
