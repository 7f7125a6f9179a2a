"""Cloudinary image hosting over its REST upload API.

Requests are signed: SHA-1 over the sorted ``key=value`` parameters joined
with ``&`` followed by the API secret.
"""

from typing import Dict, Optional, Tuple
import hashlib
import logging
import time

import httpx

from app.config import settings

logger = logging.getLogger("kitchensathi.image_host")

API_BASE = "https://api.cloudinary.com/v1_1"
RECIPE_TRANSFORMATION = "c_limit,w_800,h_600/q_auto:good/f_auto"
AVATAR_TRANSFORMATION = "c_fill,g_face,w_300,h_300/q_auto:good/f_auto"

_transport: Optional[httpx.BaseTransport] = None


class ImageHostError(Exception):
    """Upload or deletion failed at the image host."""


def use_transport(transport: Optional[httpx.BaseTransport]) -> None:
    """Route requests through ``transport`` (tests stub the network this way)."""
    global _transport
    _transport = transport


def is_configured() -> bool:
    return settings.image_host_enabled()


def sign(params: Dict[str, str], api_secret: str) -> str:
    payload = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] != "")
    return hashlib.sha1((payload + api_secret).encode("utf-8")).hexdigest()


def _signed(params: Dict[str, str]) -> Dict[str, str]:
    params = dict(params, timestamp=str(int(time.time())))
    params["signature"] = sign(params, settings.cloudinary_api_secret)
    params["api_key"] = settings.cloudinary_api_key
    return params


def _post(action: str, data: Dict[str, str], files=None) -> dict:
    url = f"{API_BASE}/{settings.cloudinary_cloud_name}/image/{action}"
    try:
        with httpx.Client(timeout=30.0, transport=_transport) as client:
            response = client.post(url, data=data, files=files)
    except httpx.HTTPError as exc:
        logger.error("image_host_unreachable action=%s error=%s", action, exc)
        raise ImageHostError("Image host is unreachable") from exc

    if response.status_code >= 400:
        try:
            message = response.json().get("error", {}).get("message")
        except ValueError:
            message = None
        logger.error(
            "image_host_error action=%s status=%s message=%s",
            action,
            response.status_code,
            message,
        )
        raise ImageHostError(message or f"Image host returned HTTP {response.status_code}")
    return response.json()


def upload(
    content: bytes,
    filename: str,
    content_type: str,
    folder: str,
    transformation: str = RECIPE_TRANSFORMATION,
) -> Tuple[str, str]:
    """
    Upload an image.

    Returns:
        ``(secure_url, public_id)``
    """
    data = _signed({"folder": folder, "transformation": transformation})
    result = _post("upload", data, files={"file": (filename, content, content_type)})
    logger.info("image_uploaded public_id=%s", result.get("public_id"))
    return result["secure_url"], result["public_id"]


def destroy(public_id: str) -> None:
    result = _post("destroy", _signed({"public_id": public_id}))
    logger.info("image_deleted public_id=%s result=%s", public_id, result.get("result"))
