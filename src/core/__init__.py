"""Core application components.

This module provides the foundational components for the Streme auth API:
- Application settings and configuration
- Session secret resolution
"""
