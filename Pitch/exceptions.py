from rest_framework import status
from rest_framework.exceptions import APIException


class SlotAlreadyBooked(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This slot is already booked, choose another"
    default_code = "slot_already_booked"


class InvalidBookingTransition(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This booking can no longer be changed"
    default_code = "invalid_transition"


class PitchNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Pitch not found"
    default_code = "pitch_not_found"


class BookingNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Booking not found"
    default_code = "booking_not_found"
