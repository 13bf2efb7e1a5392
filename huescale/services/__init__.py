"""
Huescale Services

Color primitives, pattern learning, palette generation and the pipelines
that chain them together.
"""
