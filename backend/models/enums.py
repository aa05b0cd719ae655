from enum import Enum

class UserRole(str, Enum):
    USER = "user"
    DONOR = "donor"
    ADMIN = "admin"

class BloodGroup(str, Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"

class Region(str, Enum):
    NORTH = "North"
    EAST = "East"
    WEST = "West"
    SOUTH = "South"

class RequestStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    FULFILLED = "Fulfilled"
    CRITICAL = "Critical"

class InventoryStatus(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

class NotificationAudience(str, Enum):
    USER = "user"
    DONOR = "donor"
    ADMIN = "admin"
    ALL = "all"
