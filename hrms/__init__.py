"""HRMS backend: archive/restore subsystem and activity log."""

__version__ = "0.1.0"
