"""
Image asset fetcher for PDF report embedding.

Resolves image references from the evaluation record (clinic logo, body
diagram, referral-question illustrations, digital-library photos) to raw
bytes.  References are either ``http(s)://`` URLs or ``data:image/...``
URIs submitted inline by the wizard.

``AssetFetcher.fetch`` returns ``bytes | None`` and never raises — callers
render a placeholder for ``None``.  One fetcher lives for exactly one report
build; it memoizes per reference so the logo shown on the cover and again on
the client-information page is only downloaded once.

Also provides the Pillow overlay that draws pain markers onto the body
diagram.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from io import BytesIO
from typing import Iterable, Optional

import httpx
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from app.config import settings

logger = logging.getLogger(__name__)


def _preview(ref: str, limit: int = 64) -> str:
    """Short form of a reference for log lines (data URIs can be megabytes)."""
    return ref if len(ref) <= limit else f"{ref[:limit]}... (len={len(ref)})"


# ──────────────────────────────────────────────────────────────────
# DECODING / VALIDATION
# ──────────────────────────────────────────────────────────────────

def decode_data_uri(ref: str) -> bytes | None:
    """Decode a ``data:image/...;base64,`` URI. Returns None if malformed."""
    if not ref.lower().startswith("data:image/"):
        return None
    header, _, payload = ref.partition(",")
    if ";base64" not in header.lower() or not payload:
        return None
    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError):
        return None


def is_image(data: bytes | None) -> bool:
    """True when Pillow can identify ``data`` as a raster image."""
    if not data:
        return False
    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
        return True
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        return False


# ──────────────────────────────────────────────────────────────────
# FETCHER
# ──────────────────────────────────────────────────────────────────

class AssetFetcher:
    """Per-build image resolver with memoization.

    Usage:
        async with AssetFetcher() as fetcher:
            logo = await fetcher.fetch(profile.logo_ref)
            photos = await fetcher.fetch_all(urls)

    Pass ``client`` to supply a preconfigured ``httpx.AsyncClient`` (e.g.
    one backed by ``httpx.MockTransport`` in tests); the fetcher then leaves
    closing it to the caller.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.image_fetch_timeout,
            follow_redirects=True,
        )
        self._results: dict[str, asyncio.Task] = {}

    async def __aenter__(self) -> "AssetFetcher":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        self._results.clear()
        if self._owns_client:
            await self._client.aclose()

    async def fetch(self, ref: Optional[str]) -> bytes | None:
        """Resolve one reference. Absent refs return None without I/O."""
        if not ref or not isinstance(ref, str):
            return None
        task = self._results.get(ref)
        if task is None:
            task = asyncio.ensure_future(self._resolve(ref))
            self._results[ref] = task
        return await task

    async def fetch_all(self, refs: Iterable[Optional[str]]) -> list[bytes | None]:
        """Resolve many references concurrently; results keep input order."""
        return list(await asyncio.gather(*(self.fetch(r) for r in refs)))

    async def _resolve(self, ref: str) -> bytes | None:
        try:
            return await self._load(ref)
        except Exception as exc:
            logger.warning("Image could not be resolved (%s): %s", _preview(ref), exc)
            return None

    async def _load(self, ref: str) -> bytes | None:
        if ref.lower().startswith("data:"):
            data = decode_data_uri(ref)
            if not is_image(data):
                logger.warning("Undecodable data URI image: %s", _preview(ref))
                return None
            return data

        if not ref.lower().startswith(("http://", "https://")):
            logger.warning("Unsupported image reference: %s", _preview(ref))
            return None

        try:
            resp = await self._client.get(ref)
        except Exception as exc:
            logger.warning("Image fetch failed (%s): %s", _preview(ref), exc)
            return None

        if not resp.is_success:
            logger.warning("Image host returned status %s for %s", resp.status_code, _preview(ref))
            return None
        if not is_image(resp.content):
            logger.warning("Response is not an image (%s, %s)",
                           resp.headers.get("content-type", "?"), _preview(ref))
            return None
        return resp.content


# ──────────────────────────────────────────────────────────────────
# PAIN MARKER OVERLAY (Pillow)
# ──────────────────────────────────────────────────────────────────

def draw_pain_markers(
    image_bytes: bytes,
    markers: Iterable[tuple[float, float, str]],
    color: tuple[int, int, int] = (255, 0, 0),
) -> bytes:
    """Draw legend symbols onto the body diagram.

    Args:
        image_bytes: Raw PNG/JPEG bytes of the body diagram.
        markers: ``(x_pct, y_pct, symbol)`` triples; coordinates are
            percentages of the image width/height.

    Returns:
        PNG bytes with markers drawn, or the input unchanged when there is
        nothing to draw.
    """
    markers = list(markers)
    if not markers:
        return image_bytes

    img = Image.open(BytesIO(image_bytes)).convert("RGBA")
    w, h = img.size
    radius = max(4, min(w, h) // 40)
    overlay = Image.new("RGBA", img.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    font = ImageFont.load_default()

    for x_pct, y_pct, symbol in markers:
        cx = max(0.0, min(100.0, x_pct)) / 100 * w
        cy = max(0.0, min(100.0, y_pct)) / 100 * h
        draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius],
                     outline=color + (255,), width=2)
        if symbol:
            draw.text((cx + radius + 2, cy - radius), symbol, fill=color + (255,), font=font)

    composited = Image.alpha_composite(img, overlay)
    buf = BytesIO()
    composited.save(buf, format="PNG")
    return buf.getvalue()
