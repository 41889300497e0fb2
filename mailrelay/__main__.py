"""Run the mail relay with uvicorn: ``python -m mailrelay``."""

import uvicorn

from mailrelay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "mailrelay.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
