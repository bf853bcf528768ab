import uvicorn

from korat.platform.config import settings

if __name__ == "__main__":
    uvicorn.run("korat.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
