"""Vehicle entry registration and allow/deny transitions."""

from datetime import timedelta
from sqlalchemy import or_
from sqlalchemy.orm import contains_eager

from checkpoint import db
from checkpoint.models import ENTRY_STATUSES, QRCode, VehicleEntry
from checkpoint.utils.error_handler import InvalidStatus, NotFoundError
from checkpoint.utils.helpers import utcnow
from checkpoint.utils.logging_config import get_logger
from checkpoint.utils.security import clean_mobile_number, clean_text_field, normalize_qr_code_id

logger = get_logger(__name__)

DEFAULT_STATUS = 'allowed'
# Statuses a guard may switch a registered entry between
UPDATABLE_STATUSES = ('allowed', 'denied')

# (attribute, max length, label used in error messages)
TEXT_FIELDS = (
    ('vehicle_number', 50, 'vehicle number'),
    ('driver_name', 100, 'driver name'),
    ('vehicle_type', 50, 'vehicle type'),
    ('purpose', 200, 'purpose'),
)


class EntryService:
    """Registers vehicles against QR codes and moves entries between allowed and denied."""

    def __init__(self, clock=utcnow):
        self.clock = clock

    def register(self, qr_code_id, attributes, status=None):
        """
        Append a new vehicle entry for qr_code_id and return its id.

        attributes may hold vehicle_number, driver_name, vehicle_type,
        purpose and mobile_number. Every field is validated before anything
        is written. An existing registration for the same code is kept as
        history; the new row becomes the current entry.
        """
        qr_code_id = normalize_qr_code_id(qr_code_id)

        values = {}
        for field, max_length, label in TEXT_FIELDS:
            values[field] = clean_text_field(attributes.get(field), max_length, label)
        values['mobile_number'] = clean_mobile_number(attributes.get('mobile_number'))

        if status is None or status == '':
            status = DEFAULT_STATUS
        elif status not in ENTRY_STATUSES:
            raise InvalidStatus(f'Status must be one of: {", ".join(ENTRY_STATUSES)}')

        if db.session.get(QRCode, qr_code_id) is None:
            raise NotFoundError('QR code not found')

        now = self.clock()
        entry = VehicleEntry(
            qr_code_id=qr_code_id,
            status=status,
            created_at=now,
            updated_at=now,
            **values
        )
        db.session.add(entry)
        db.session.commit()

        logger.info(f"Registered entry {entry.id} for QR code {qr_code_id} as {status}")
        return entry.id

    def update_status(self, qr_code_id, status):
        """Set status on every entry of qr_code_id and return how many were updated."""
        qr_code_id = normalize_qr_code_id(qr_code_id)
        if status not in UPDATABLE_STATUSES:
            raise InvalidStatus('Status must be "allowed" or "denied"')

        entries = VehicleEntry.query.filter_by(qr_code_id=qr_code_id).all()
        if not entries:
            raise NotFoundError('Vehicle entry not found')

        now = self.clock()
        for entry in entries:
            # updated_at must move forward even when the clock has not
            entry.updated_at = max(now, entry.updated_at + timedelta(microseconds=1))
            entry.status = status
        db.session.commit()

        logger.info(f"Updated {len(entries)} entry(ies) for QR code {qr_code_id} to {status}")
        return len(entries)

    def list_entries(self, status=None, search=None):
        """
        All entries joined with their QR code, most recently updated first.

        status filters on an exact status value; search is a
        case-insensitive substring match on vehicle number, driver name,
        QR code ID and purpose.
        """
        query = (VehicleEntry.query
                 .join(VehicleEntry.qr_code)
                 .options(contains_eager(VehicleEntry.qr_code)))
        if status:
            if status not in ENTRY_STATUSES:
                raise InvalidStatus(f'Status must be one of: {", ".join(ENTRY_STATUSES)}')
            query = query.filter(VehicleEntry.status == status)
        term = (search or '').strip()
        if term:
            query = query.filter(or_(
                VehicleEntry.vehicle_number.icontains(term, autoescape=True),
                VehicleEntry.driver_name.icontains(term, autoescape=True),
                VehicleEntry.qr_code_id.icontains(term, autoescape=True),
                VehicleEntry.purpose.icontains(term, autoescape=True)
            ))
        entries = query.order_by(VehicleEntry.updated_at.desc(), VehicleEntry.id.desc()).all()
        return [entry.to_row() for entry in entries]
