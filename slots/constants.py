# slots/constants.py

# Fixed, ordered catalog of bookable windows. A pitch offers a subset of these.
SLOT_CATALOG = (
    "06:00 - 07:30",
    "07:30 - 09:00",
    "09:00 - 10:30",
    "10:30 - 12:00",
    "14:00 - 15:30",
    "15:30 - 17:00",
    "17:00 - 18:30",
    "18:30 - 20:00",
    "20:00 - 21:30",
)

SLOT_POSITION = {label: idx for idx, label in enumerate(SLOT_CATALOG)}
