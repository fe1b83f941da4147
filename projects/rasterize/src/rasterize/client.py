"""Conversion of PlantUML text into images through a Kroki server."""

from __future__ import annotations

from http import HTTPStatus
from logging import getLogger
from typing import Literal

from requests import RequestException, post

from diagram.errors import RasterizeError

logger = getLogger(__name__)

KROKI_URL = "https://kroki.io"

type ImageFormat = Literal["svg", "png"]


def plantuml_to_image(
    source: str,
    fmt: ImageFormat = "svg",
    *,
    server: str = KROKI_URL,
    timeout: float = 30,
) -> bytes:
    """Send PlantUML text to the diagram server and return the rendered image."""
    url = f"{server.rstrip('/')}/plantuml/{fmt}"
    logger.debug("Rendering diagram with %s", url)

    try:
        response = post(
            url,
            data=source.encode(),
            headers={"Content-Type": "text/plain"},
            timeout=timeout,
        )
    except RequestException as e:
        msg = f"Failed to reach diagram server {url}: {e}"
        raise RasterizeError(msg) from e

    if response.status_code != HTTPStatus.OK:
        msg = (
            "Diagram server returned an error: "
            f"{response.status_code} {response.reason}"
        )
        raise RasterizeError(msg)

    return response.content
