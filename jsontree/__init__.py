"""JSON value trees with a comment-preserving reader, paths, and compact and styled writers."""

__version__ = "0.1.0"
__all__ = ["value", "path", "reader", "writer", "iteration", "styled", "testrunner"]