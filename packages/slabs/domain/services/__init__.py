#!/usr/bin/env python3
"""
Domain services for chunking operations.

Domain services encapsulate business logic that doesn't naturally fit
within a single entity or value object.
"""
