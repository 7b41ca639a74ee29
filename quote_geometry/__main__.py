"""Run the Quote Geometry server: python -m quote_geometry"""
import uvicorn

from quote_geometry.core.settings import get_settings


def main():
    settings = get_settings()

    # logging is configured by the app's lifespan hook
    from quote_geometry.main import app

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
