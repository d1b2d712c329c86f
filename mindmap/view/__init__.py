"""View: pan/zoom transform and the interactive session controller."""
from .transform import ViewTransform
from .controller import MindMapSession, DEFAULT_OUTLINE, GENERATION_ERROR

__all__ = ["ViewTransform", "MindMapSession", "DEFAULT_OUTLINE", "GENERATION_ERROR"]
