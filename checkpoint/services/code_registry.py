"""QR code registry: persistence, listing, batch generation and deletion."""

import uuid
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import FlushError

from checkpoint import db
from checkpoint.models import QRCode
from checkpoint.services.scan_resolver import ScanResolver
from checkpoint.utils.error_handler import (
    DatabaseError, DuplicateKeyError, InvalidIdentifier, NotFoundError, ValidationError
)
from checkpoint.utils.helpers import isoformat
from checkpoint.utils.logging_config import get_logger
from checkpoint.utils.qr_generator import generate_unique_qr_code_id
from checkpoint.utils.security import is_valid_qr_code_id, normalize_qr_code_id, sanitize_qr_code_id

logger = get_logger(__name__)

# Fresh IDs tried per item after an insert collision
INSERT_ATTEMPTS = 3


class CodeRegistry:
    """Stores generated QR codes and their rendered images."""

    def __init__(self, qr_generator, url_prefix='/qr_codes', max_retries=100, batch_sizes=(10, 50, 100)):
        self.qr_generator = qr_generator
        self.url_prefix = url_prefix
        self.max_retries = max_retries
        self.batch_sizes = tuple(batch_sizes)

    def exists(self, qr_id):
        return db.session.query(QRCode.id).filter_by(id=qr_id).first() is not None

    def insert(self, qr_id, batch_id=None):
        """Insert a QR code row, raising DuplicateKeyError if the ID is taken."""
        qr_id = normalize_qr_code_id(qr_id)
        qr_code = QRCode(id=qr_id, batch_id=batch_id)
        db.session.add(qr_code)
        try:
            db.session.flush()
        except (IntegrityError, FlushError) as e:
            db.session.rollback()
            raise DuplicateKeyError(f'Duplicate ID detected: {qr_id}') from e
        return qr_code

    def get(self, qr_id):
        qr_code = db.session.get(QRCode, normalize_qr_code_id(qr_id))
        if qr_code is None:
            raise NotFoundError('QR code not found')
        return qr_code

    def image_url(self, qr_id):
        return f'{self.url_prefix}/{qr_id}.png'

    def list_all(self, batch_id=None):
        """
        List QR codes, newest first, each joined with its current entry summary.

        Returns one dict per code with keys id, generated_at, batch_id,
        vehicle_number, driver_name, status and registered_at. The entry
        fields are None for codes that have not been registered.
        """
        query = QRCode.query
        if batch_id:
            query = query.filter_by(batch_id=batch_id)
        codes = query.order_by(QRCode.generated_at.desc(), QRCode.id).all()

        current = ScanResolver.current_entries_for([code.id for code in codes])
        rows = []
        for code in codes:
            entry = current.get(code.id)
            rows.append({
                'id': code.id,
                'generated_at': isoformat(code.generated_at),
                'batch_id': code.batch_id,
                'vehicle_number': entry.vehicle_number if entry else None,
                'driver_name': entry.driver_name if entry else None,
                'status': entry.status if entry else None,
                'registered_at': isoformat(entry.created_at) if entry else None
            })
        return rows

    def generate_batch(self, count):
        """
        Generate count new QR codes in one batch.

        Each item is generated, rendered and committed on its own; failures
        are collected in the returned errors list instead of aborting the
        batch.
        """
        if isinstance(count, float) and count.is_integer():
            # JSON clients may send 10.0 for 10
            count = int(count)
        if not isinstance(count, int) or isinstance(count, bool) or count not in self.batch_sizes:
            sizes = ', '.join(str(size) for size in self.batch_sizes[:-1])
            raise ValidationError(f'Count must be {sizes}, or {self.batch_sizes[-1]}')

        batch_id = uuid.uuid4().hex
        qr_codes = []
        errors = []

        for _ in range(count):
            try:
                qr_id = self._create_one(batch_id)
            except (DuplicateKeyError, InvalidIdentifier, DatabaseError) as e:
                errors.append({'error': e.message})
                continue

            qr_codes.append({
                'id': qr_id,
                'imageUrl': self.image_url(qr_id)
            })

        logger.info(f"Generated {len(qr_codes)} of {count} QR codes in batch {batch_id}")
        return batch_id, qr_codes, errors

    def _create_one(self, batch_id):
        last_error = None
        for _ in range(INSERT_ATTEMPTS):
            qr_id = generate_unique_qr_code_id(self.exists, self.max_retries)
            if not is_valid_qr_code_id(qr_id):
                raise InvalidIdentifier('Generated invalid QR code ID')

            try:
                self.insert(qr_id, batch_id)
            except DuplicateKeyError as e:
                # Another writer took the ID between the check and the insert
                logger.warning(str(e))
                last_error = e
                continue

            try:
                self.qr_generator.render(qr_id)
                db.session.commit()
            except (OSError, ValueError) as e:
                db.session.rollback()
                self.qr_generator.remove(qr_id)
                logger.error(f"Error rendering QR code {qr_id}: {e}")
                raise DatabaseError(f'Error rendering QR code {qr_id}') from e
            except SQLAlchemyError as e:
                db.session.rollback()
                self.qr_generator.remove(qr_id)
                logger.error(f"Error storing QR code {qr_id}: {e}")
                raise DatabaseError(f'Error storing QR code {qr_id}') from e
            return qr_id

        raise last_error

    def delete(self, qr_ids):
        """
        Delete QR codes (and their entry history) by ID and return the number removed.

        Image files are removed after the rows are committed; a failed file
        removal is logged and does not affect the result.
        """
        ids = sorted({normalize_qr_code_id(qr_id) for qr_id in qr_ids})
        if not ids:
            return 0

        codes = QRCode.query.filter(QRCode.id.in_(ids)).all()
        for code in codes:
            db.session.delete(code)
        db.session.commit()

        for code in codes:
            self.qr_generator.remove(code.id)

        logger.info(f"Deleted {len(codes)} QR code(s)")
        return len(codes)

    def delete_one(self, qr_id):
        if self.delete([qr_id]) == 0:
            raise NotFoundError('QR code not found')

    def delete_many(self, raw_ids):
        """
        Delete every valid ID in raw_ids; invalid ones are reported, not fatal.

        Returns (deleted_count, errors).
        """
        if not raw_ids or not isinstance(raw_ids, list):
            raise ValidationError('QR code IDs array required')

        valid_ids = []
        errors = []
        for raw_id in raw_ids:
            sanitized = sanitize_qr_code_id(raw_id)
            if is_valid_qr_code_id(sanitized):
                valid_ids.append(sanitized)
            else:
                errors.append({'qrId': raw_id if isinstance(raw_id, str) else None,
                               'error': 'Invalid QR code ID format'})

        if not valid_ids:
            raise ValidationError('No valid QR code IDs provided')

        return self.delete(valid_ids), errors
