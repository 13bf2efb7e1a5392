"""
Huescale Palette Generation

Synthesizes ten-stop palettes from an anchor color and a learned pattern.
"""
