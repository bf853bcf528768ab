from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """
    Answers every pre-flight with a bare 200 and stamps the same CORS headers
    on every response, success or failure, whether or not an Origin was sent.
    """

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return PlainTextResponse("ok", status_code=200, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
