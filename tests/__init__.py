"""Unit tests for Nexo Translate.

This package contains test modules for all components of the translation service.
Tests use pytest with asyncio support and replace HTTP/network calls with scripted transports.
"""
