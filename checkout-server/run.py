import uvicorn

from paygate.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("paygate.main:app", host=settings.host, port=settings.port, reload=settings.server.reload)
