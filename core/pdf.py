import logging
from io import BytesIO

from django.http import HttpResponse
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)

MISSING_DEPS_MESSAGE = (
    "Die Systembibliotheken für WeasyPrint sind nicht installiert. "
    "Installiere Pango/GTK (siehe https://doc.courtbouillon.org/weasyprint/stable/first_steps.html#installation) "
    "oder nutze den HTML-Export."
)


class PdfUnavailable(RuntimeError):
    pass


def _write_pdf(html: str) -> bytes:
    """
    Render *html* to PDF bytes.
    WeasyPrint is imported lazily so that management commands and tests work
    on machines without the native libraries.
    """
    try:
        from weasyprint import HTML  # type: ignore
    except Exception as exc:  # pragma: no cover - environment without system deps
        raise PdfUnavailable(str(exc)) from exc

    pdf_io = BytesIO()
    HTML(string=html).write_pdf(target=pdf_io)
    return pdf_io.getvalue()


def pdf_response(template_name: str, context: dict, filename: str, request=None) -> HttpResponse:
    html = render_to_string(template_name, context, request=request)
    try:
        content = _write_pdf(html)
    except PdfUnavailable as exc:
        logger.error(f"PDF export unavailable: {exc}")
        return HttpResponse(MISSING_DEPS_MESSAGE, status=501, content_type="text/plain; charset=utf-8")

    response = HttpResponse(content, content_type="application/pdf")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


def html_response(template_name: str, context: dict, filename: str, request=None) -> HttpResponse:
    """Standalone HTML download of the same document."""
    html = render_to_string(template_name, context, request=request)
    response = HttpResponse(html, content_type="text/html; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response
