"""Daily task assignment & rollover engine.

Organized by feature modules (entries, completion, rollover, propagation,
attendance, analytics) with a thin Flask controller layer over
service/repository layers. Every write for a user runs under that user's lock.
"""
from __future__ import annotations

from .container import Container, build_container, wire_services

__all__ = ["Container", "build_container", "wire_services"]
