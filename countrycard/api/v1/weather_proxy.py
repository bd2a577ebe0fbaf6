import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from countrycard.api.v1.di import get_upstream_transport
from countrycard.core.config import Settings, get_proxy_api_key, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/weather")
async def weather_proxy(
    city: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
):
    """
    Forward a weather request upstream with the server-held key attached.

    The upstream status code and JSON body are passed through untouched.
    """
    key = get_proxy_api_key()
    if not key:
        logger.error("[PROXY] OPENWEATHER_API_KEY is not set")
        return PlainTextResponse("Missing OpenWeather API key on server.", status_code=500)
    if not city or not city.strip():
        return PlainTextResponse("Missing city query parameter.", status_code=400)

    params = {"q": city.strip(), "units": "metric", "appid": key}
    try:
        async with httpx.AsyncClient(timeout=None, transport=transport) as client:
            r = await client.get(settings.OPENWEATHER_BASE, params=params)
            data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("[PROXY] upstream call for %r failed: %s", city, e)
        return JSONResponse(status_code=500, content={"message": str(e)})

    logger.info("[PROXY] %r -> HTTP %s", city, r.status_code)
    return JSONResponse(status_code=r.status_code, content=data)
