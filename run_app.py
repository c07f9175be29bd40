import uvicorn

from ipgeo.config import get_settings
from ipgeo.logger import LOG_CONFIG


def main() -> None:
    """Serve the lookup API with uvicorn, bound as configured by IPGEO_HOST/IPGEO_PORT."""
    settings = get_settings()
    uvicorn.run(
        "ipgeo.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=LOG_CONFIG,
    )


if __name__ == "__main__":
    main()
