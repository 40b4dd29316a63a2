from .seed_catalog import seed_catalog

__all__ = ["seed_catalog"]
