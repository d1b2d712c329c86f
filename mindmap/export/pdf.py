"""
Scene -> raster -> single-page PDF. PdfExporter runs the chain asynchronously and
refuses to start a second export while one is in flight.
"""
from __future__ import annotations

import asyncio
import io
import logging
import os
import tempfile
from pathlib import Path

from ..config import ExportConfig
from ..layout.scene import SceneGraph
from .raster import ExportFrame, export_frame, rasterize_scene

logger = logging.getLogger(__name__)


def encode_pdf(image, frame: ExportFrame, config: ExportConfig) -> bytes:
    """
    Embed the raster as the only content of one page. The page measures the unscaled
    frame: Pillow sizes the page as pixels * 72 / resolution.
    """
    if image.width == 0 or image.height == 0:
        raise ValueError("Cannot encode an empty raster")
    buf = io.BytesIO()
    image.convert("RGB").save(
        buf,
        "PDF",
        resolution=72.0 * config.scale,
        quality=config.jpeg_quality,
        title="Mind Map",
        subject=f"{frame.orientation} {frame.width:g}x{frame.height:g}",
    )
    return buf.getvalue()


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_atomic(out_path: Path, data: bytes) -> Path:
    """Write to a temp file in the target dir, then rename; no partial file on failure."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".export-", suffix=out_path.suffix, dir=out_path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates 0600 files.
        os.chmod(tmp, _default_file_mode())
        os.replace(tmp, out_path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    return out_path


def export_pdf(scene: SceneGraph, out_path: Path | str, config: ExportConfig | None = None) -> Path:
    """Synchronous export; raises ExportError for an empty scene."""
    config = config or ExportConfig()
    frame = export_frame(scene, config.padding)
    image = rasterize_scene(scene, frame, config)
    return _write_atomic(Path(out_path), encode_pdf(image, frame, config))


def export_png(scene: SceneGraph, out_path: Path | str, config: ExportConfig | None = None) -> Path:
    """Same raster as the PDF, saved as PNG."""
    config = config or ExportConfig()
    frame = export_frame(scene, config.padding)
    image = rasterize_scene(scene, frame, config)
    buf = io.BytesIO()
    image.save(buf, "PNG")
    return _write_atomic(Path(out_path), buf.getvalue())


class PdfExporter:
    """Single in-flight PDF export; `exporting` is cleared on every exit path."""

    def __init__(self, config: ExportConfig | None = None) -> None:
        self.config = config or ExportConfig()
        self.exporting = False

    async def export(self, scene: SceneGraph | None, out_dir: Path | str) -> Path | None:
        if self.exporting:
            logger.info("Export already in progress, ignoring request")
            return None
        self.exporting = True
        try:
            if scene is None:
                raise ValueError("Nothing has been rendered yet")
            frame = export_frame(scene, self.config.padding)
            logger.info("Exporting %gx%g (%s) at x%d", frame.width, frame.height, frame.orientation, self.config.scale)
            image = await asyncio.to_thread(rasterize_scene, scene, frame, self.config)
            data = await asyncio.to_thread(encode_pdf, image, frame, self.config)
            out_path = Path(out_dir) / self.config.filename
            await asyncio.to_thread(_write_atomic, out_path, data)
            logger.info("PDF: %s", out_path)
            return out_path
        except Exception:
            logger.exception("Export failed")
            return None
        finally:
            self.exporting = False
