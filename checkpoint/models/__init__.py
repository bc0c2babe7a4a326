from checkpoint import db

# Import models after db is defined
from .qr_code import QRCode
from .vehicle_entry import VehicleEntry, ENTRY_STATUSES

# Export models
__all__ = ['db', 'QRCode', 'VehicleEntry', 'ENTRY_STATUSES']
