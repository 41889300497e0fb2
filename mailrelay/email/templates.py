"""Email body rendering.

The HTML body comes from ``template.html`` in the working directory when it
exists, with the literal ``{{subject}}`` and ``{{body}}`` tokens replaced.
Otherwise a minimal inline page is used.

The request body is inserted as raw HTML on both paths unless escaping is
switched on, so callers can inject arbitrary markup into the message.
"""

import html
from pathlib import Path

from mailrelay.core.logging import get_logger

from .schemas import EmailRequest


logger = get_logger(__name__)

DEFAULT_TEMPLATE_PATH = Path("template.html")

SUBJECT_TOKEN = "{{subject}}"
BODY_TOKEN = "{{body}}"

BASIC_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset='utf-8'>
    <title>{subject}</title>
</head>
<body>
    <h2>{subject}</h2>
    <div>{body}</div>
    <hr>
    <p><small>Sent via mailrelay</small></p>
</body>
</html>"""


def render_basic_template(subject: str, body: str) -> str:
    """Render the built-in fallback page."""
    return BASIC_TEMPLATE.format(subject=subject, body=body)


def substitute_tokens(template: str, subject: str, body: str) -> str:
    """Replace the subject and body placeholders in ``template``."""
    return template.replace(SUBJECT_TOKEN, subject).replace(BODY_TOKEN, body)


def render_email_body(
    request: EmailRequest,
    template_path: Path | str = DEFAULT_TEMPLATE_PATH,
    escape_body: bool = False,
) -> str:
    """Render the HTML body for ``request``.

    Args:
        request: Validated email request
        template_path: Template file; relative paths resolve against the
            current working directory
        escape_body: HTML-escape subject and body before insertion

    Returns:
        Rendered HTML. Never raises; any problem with the template file
        falls back to the built-in page.
    """
    subject = html.escape(request.subject) if escape_body else request.subject
    body = html.escape(request.body) if escape_body else request.body

    path = Path.cwd() / template_path

    try:
        if not path.is_file():
            logger.warning("email_template_not_found", path=str(path))
            return render_basic_template(subject, body)

        template = path.read_text(encoding="utf-8")
        return substitute_tokens(template, subject, body)

    except (OSError, UnicodeDecodeError) as e:
        logger.error(
            "email_template_read_failed",
            path=str(path),
            error=str(e),
        )
        return render_basic_template(subject, body)
