"""
Core math primitives, domain models, and contracts.

This module contains the foundational building blocks of the digit stream
that do not depend on how the stream is hosted (CLI, iterator, etc.).
"""
