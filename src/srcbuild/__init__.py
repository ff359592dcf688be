"""srcbuild: compile source files with a plugin-driven transformer.

Runs the same build logic on top of either the native standard library or an
emulated runtime assembled from low-level OS primitives.
"""

__version__ = "0.3.0"
