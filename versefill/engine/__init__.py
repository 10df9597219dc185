"""Citation resolution engine."""
from .dispatcher import ResolutionDispatcher, ResolutionTask
from .field import ScriptureField

__all__ = ["ResolutionDispatcher", "ResolutionTask", "ScriptureField"]
