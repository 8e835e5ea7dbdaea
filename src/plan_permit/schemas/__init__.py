from .bases import CanonicalModel, BaseSignature, BasePermit

__all__ = [
    "CanonicalModel",
    "BaseSignature",
    "BasePermit",
]
