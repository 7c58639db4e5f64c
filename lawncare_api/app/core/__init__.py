"""Configuration, logging, security, database helpers and domain errors."""
