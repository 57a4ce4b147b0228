from accord.models.compatibility import CompatibilityScore

__all__ = ["CompatibilityScore"]
