"""Shared utilities and cross-domain components.

This module contains utilities used across multiple domains:
- Exception classes for consistent error handling
- Account access checks for identity-scoped resources
- Farcaster sign-in verification
"""
