"""Training plan schema, schedule, queries and validation."""
