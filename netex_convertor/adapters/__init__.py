"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Object storage (filesystem buckets, in-memory)
- Operator reference data (Redis, in-memory)
- XML Schema validation (lxml)
- Email (SendGrid) and alerting (logging)
"""
