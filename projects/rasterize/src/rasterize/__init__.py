"""Diagram rasterization through a remote rendering server."""

from rasterize.client import KROKI_URL, ImageFormat, plantuml_to_image

__all__ = ["KROKI_URL", "ImageFormat", "plantuml_to_image"]
