from .enums import (
    UserRole, BloodGroup, Region, RequestStatus, InventoryStatus, NotificationAudience
)
from .user import User, UserCreate, UserLogin, UserUpdate, UserResponse
from .donor import Donor, DonationEntry, DonationCreate, AvailabilityUpdate
from .inventory import BloodInventory, InventoryUnitsUpdate
from .request import BloodRequest, BloodRequestCreate, StatusUpdate, Approver
from .notification import Notification, NotificationCreate
from .blood_bank import BloodBank, BloodBankCreate, BankInventoryUpdate
from .timestamps import utc_now
