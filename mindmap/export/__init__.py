"""Export: scene -> raster (Pillow) -> PDF / PNG."""
from .raster import ExportError, ExportFrame, export_frame, rasterize_scene
from .pdf import PdfExporter, encode_pdf, export_pdf, export_png

__all__ = [
    "ExportError",
    "ExportFrame",
    "export_frame",
    "rasterize_scene",
    "PdfExporter",
    "encode_pdf",
    "export_pdf",
    "export_png",
]
