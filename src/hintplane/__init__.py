"""HintPlane - symbol indexing and name resolution for editor code intelligence."""

__version__ = "0.1.0"
