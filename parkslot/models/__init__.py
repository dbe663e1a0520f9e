# Parkslot — Database Models
# Import all models here for SQLAlchemy discovery

from parkslot.models.area import ParkingArea       # noqa
from parkslot.models.slot import ParkingSlot       # noqa
from parkslot.models.vehicle import Vehicle        # noqa
from parkslot.models.booking import Booking        # noqa
