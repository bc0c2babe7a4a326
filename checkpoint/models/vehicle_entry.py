from checkpoint import db
from checkpoint.utils.helpers import isoformat, utcnow

ENTRY_STATUSES = ('pending', 'allowed', 'denied')


class VehicleEntry(db.Model):
    __tablename__ = 'vehicle_entries'
    
    id = db.Column(db.Integer, primary_key=True)
    qr_code_id = db.Column(db.String(10), db.ForeignKey('qr_codes.id'), nullable=False, index=True)
    vehicle_number = db.Column(db.String(50), nullable=False, default='')
    driver_name = db.Column(db.String(100), nullable=False, default='')
    mobile_number = db.Column(db.String(20), nullable=True)
    vehicle_type = db.Column(db.String(50), nullable=False, default='')
    purpose = db.Column(db.String(200), nullable=False, default='')
    status = db.Column(db.Enum(*ENTRY_STATUSES, name='entry_status'), nullable=False, default='allowed')
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    qr_code = db.relationship('QRCode', back_populates='entries')
    
    def to_vehicle_dict(self):
        """Serialize for the guard scan view"""
        return {
            'id': self.id,
            'vehicleNumber': self.vehicle_number,
            'driverName': self.driver_name,
            'mobileNumber': self.mobile_number,
            'vehicleType': self.vehicle_type,
            'purpose': self.purpose,
            'status': self.status,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at)
        }
    
    def to_row(self):
        """Serialize as a report row joined with its QR code metadata"""
        return {
            'id': self.id,
            'qr_code_id': self.qr_code_id,
            'vehicle_number': self.vehicle_number,
            'driver_name': self.driver_name,
            'mobile_number': self.mobile_number,
            'vehicle_type': self.vehicle_type,
            'purpose': self.purpose,
            'status': self.status,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'qr_generated_at': isoformat(self.qr_code.generated_at) if self.qr_code else None
        }
    
    def __repr__(self):
        return f'<VehicleEntry {self.id} for {self.qr_code_id}>'
