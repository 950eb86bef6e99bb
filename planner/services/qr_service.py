"""
QR code generation service
"""

import io
import qrcode

from planner.core.config import settings

class QRService:
    """Service for generating QR codes"""

    @staticmethod
    def generate_qr(url: str, format: str = 'PNG') -> bytes:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(url)
        qr.make(fit=True)

        # Create QR code image
        img = qr.make_image(fill_color="black", back_color="white")

        # Convert to bytes
        buffer = io.BytesIO()
        img.save(buffer, format=format)

        return buffer.getvalue()

    @staticmethod
    def website_url(slug: str) -> str:
        """Public address of a wedding website"""
        return f"{settings.BASE_URL}/w/{slug}"

    @staticmethod
    def rsvp_url(token: str) -> str:
        """Personal RSVP link sent to a stage 2 guest"""
        return f"{settings.BASE_URL}/rsvp/{token}"

    @staticmethod
    def generate_website_qr(slug: str) -> bytes:
        return QRService.generate_qr(QRService.website_url(slug))

    @staticmethod
    def generate_rsvp_qr(token: str) -> bytes:
        return QRService.generate_qr(QRService.rsvp_url(token))
