"""UI controllers package.

Controllers mediate between the UI widgets and the core providers and
services. They contain no UI toolkit code.
"""

from .viewer_controller import ViewerController  # noqa: F401

__all__: list[str] = ["ViewerController"]
