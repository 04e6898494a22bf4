"""
Core domain models, arithmetic engine, and transcendental algorithms.

This module contains the foundational building blocks that are independent
of the outer surfaces (CLI, batch evaluation).
"""
