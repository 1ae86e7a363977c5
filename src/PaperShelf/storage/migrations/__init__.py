"""Catalog schema migrations, one module per version (``v001_initial_schema``, ...).

See :mod:`PaperShelf.storage.migration` for how they are found and applied.
"""
