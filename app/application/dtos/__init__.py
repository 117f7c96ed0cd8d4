"""Application DTOs: plain dataclasses crossing the application/infrastructure boundary."""
