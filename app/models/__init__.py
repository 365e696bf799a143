# Cochera — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.parking_session import ParkingSession   # noqa
from app.models.withdrawal import WithdrawalRecord       # noqa
