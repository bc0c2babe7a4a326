from checkpoint import db
from checkpoint.utils.helpers import utcnow


class QRCode(db.Model):
    __tablename__ = 'qr_codes'
    
    id = db.Column(db.String(10), primary_key=True)  # 5-character [0-9A-Z] code
    generated_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    batch_id = db.Column(db.String(32), nullable=True, index=True)  # One generate request
    
    # Relationships
    entries = db.relationship('VehicleEntry', back_populates='qr_code', lazy=True,
                              cascade='all, delete-orphan')
    
    def __repr__(self):
        return f'<QRCode {self.id}>'
