"""HTTP API for a pilot's logbook: flights, aircraft, contacts and profiles."""

__version__ = "0.1.0"