from creations.models.creation import Creation

__all__ = ["Creation"]
