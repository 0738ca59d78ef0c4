from . import story_pack

__all__ = ["story_pack"]
