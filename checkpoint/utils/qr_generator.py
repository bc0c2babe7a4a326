import os
import secrets
import qrcode

from checkpoint.utils.logging_config import get_logger
from checkpoint.utils.security import qr_image_path

QR_CODE_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'
QR_CODE_ID_LENGTH = 5

logger = get_logger(__name__)


def generate_qr_code_id():
    """Generate a random 5-character alphanumeric QR code ID."""
    return ''.join(secrets.choice(QR_CODE_ALPHABET) for _ in range(QR_CODE_ID_LENGTH))


def generate_unique_qr_code_id(exists_check, max_retries=100):
    """
    Generate a QR code ID that exists_check reports as unused.

    After max_retries collisions one extra symbol is appended to the last
    candidate and returned unchecked. That 6-character ID is not a valid
    QR code ID, so callers must validate the result before using it.
    """
    for _ in range(max(1, max_retries)):
        qr_id = generate_qr_code_id()
        if not exists_check(qr_id):
            return qr_id

    logger.warning(f"No free QR code ID after {max_retries} attempts")
    return qr_id + secrets.choice(QR_CODE_ALPHABET)


class QRGenerator:
    def __init__(self, qr_code_dir, width=300, margin=2):
        self.qr_code_dir = qr_code_dir
        self.width = width
        self.margin = margin

    def image_path(self, qr_id):
        return qr_image_path(self.qr_code_dir, qr_id)

    def render(self, qr_id):
        """
        Render the QR code image for qr_id and return its path
        """
        path = self.image_path(qr_id)

        # Ensure directory exists
        os.makedirs(self.qr_code_dir, exist_ok=True)

        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            border=self.margin,
        )
        qr.add_data(qr_id)
        qr.make(fit=True)

        # Scale the module size so the image is close to the requested width
        modules = qr.modules_count + 2 * self.margin
        qr.box_size = max(1, self.width // modules)

        qr_img = qr.make_image(fill_color="black", back_color="white")
        qr_img.save(path)
        return path

    def remove(self, qr_id):
        """
        Delete the rendered image for qr_id; failures are logged, never raised
        """
        try:
            path = self.image_path(qr_id)
            if os.path.exists(path):
                os.remove(path)
                return True
        except OSError as e:
            logger.error(f"Error deleting QR code image {qr_id}: {e}")
        return False
