from mailrelay.config.settings import AuthType, Settings, SmtpSettings, get_settings


__all__ = ["AuthType", "Settings", "SmtpSettings", "get_settings"]
