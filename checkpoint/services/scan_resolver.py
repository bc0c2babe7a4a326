"""Resolve a scanned QR code to its registration state."""

from dataclasses import dataclass
from typing import Optional

from checkpoint import db
from checkpoint.models import QRCode, VehicleEntry
from checkpoint.utils.error_handler import NotFoundError
from checkpoint.utils.security import normalize_qr_code_id


@dataclass(frozen=True)
class ScanResult:
    qr_code_id: str
    entry: Optional[VehicleEntry] = None

    @property
    def registered(self):
        return self.entry is not None

    def to_dict(self):
        if not self.registered:
            return {
                'qrCodeId': self.qr_code_id,
                'registered': False,
                'message': 'Unregistered - Please enter vehicle details'
            }
        return {
            'qrCodeId': self.qr_code_id,
            'registered': True,
            'vehicle': self.entry.to_vehicle_dict()
        }


class ScanResolver:
    """Read-only view deriving the current entry of a QR code from its history."""

    @staticmethod
    def current_entry_for(qr_code_id):
        """Latest entry by creation time (highest id on ties), or None."""
        return (VehicleEntry.query
                .filter_by(qr_code_id=qr_code_id)
                .order_by(VehicleEntry.created_at.desc(), VehicleEntry.id.desc())
                .first())

    @staticmethod
    def current_entries_for(qr_code_ids):
        """Map each QR code ID to its current entry; unregistered codes are absent."""
        if not qr_code_ids:
            return {}
        entries = (VehicleEntry.query
                   .filter(VehicleEntry.qr_code_id.in_(qr_code_ids))
                   .order_by(VehicleEntry.created_at.desc(), VehicleEntry.id.desc())
                   .all())
        current = {}
        for entry in entries:
            current.setdefault(entry.qr_code_id, entry)
        return current

    def resolve(self, qr_id):
        qr_id = normalize_qr_code_id(qr_id)
        if db.session.get(QRCode, qr_id) is None:
            raise NotFoundError('QR code not found')
        return ScanResult(qr_code_id=qr_id, entry=self.current_entry_for(qr_id))
