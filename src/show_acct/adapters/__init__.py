"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (CLI) and render reports
- Outbound adapters: Implement external dependencies (files, passwd)
"""
