from leadmatch.models.property import Property

__all__ = ["Property"]
