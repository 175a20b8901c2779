"""Kernel – errors, result types, domain event base and messaging ports."""
