"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the planner to external text generators:
- OpenAI and OpenAI-compatible chat models
- Anthropic models
- An offline generator for demos and tests
"""
