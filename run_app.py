import os

import uvicorn


def main() -> None:
    """Run the GeoIP2 gateway with uvicorn."""
    uvicorn.run(
        "geoip_ws.main:app",
        host=os.getenv("GEOIP_GATEWAY_HOST", "127.0.0.1"),
        port=int(os.getenv("GEOIP_GATEWAY_PORT", "8000")),
        reload=os.getenv("GEOIP_GATEWAY_RELOAD", "") == "1",
    )


if __name__ == "__main__":
    main()
