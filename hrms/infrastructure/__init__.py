"""Infraestructura: DB pool y adapters de persistencia."""
