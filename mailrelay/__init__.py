"""Contact-form mail relay: a contact page plus a JSON-to-SMTP SendMail function."""

__version__ = "0.1.0"
