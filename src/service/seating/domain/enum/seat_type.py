from enum import Enum


class SeatType(Enum):
    REGULAR = 'regular'
    PREMIUM = 'premium'
    VIP = 'vip'
    EXECUTIVE = 'executive'
