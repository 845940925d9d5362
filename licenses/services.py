import logging
import re

from accounts.services import increment_activity
from core.pdf import pdf_response

logger = logging.getLogger(__name__)


def save_license(user, form):
    generated = form.save(commit=False)
    generated.owner = user
    generated.save()
    increment_activity(user, "generated_licenses")
    logger.info(f"License {generated.pk} ({generated.license}) generated by user {user.pk}")
    return generated


def license_filename(generated) -> str:
    return f"CC-Lizenz_{re.sub(r'[^a-z0-9]', '_', generated.title, flags=re.IGNORECASE)}.pdf"


def generate_license_pdf(generated):
    return pdf_response(
        "licenses/license_pdf.html",
        {"license": generated},
        license_filename(generated),
    )
