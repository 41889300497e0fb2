from mailrelay.health.router import router


__all__ = ["router"]
