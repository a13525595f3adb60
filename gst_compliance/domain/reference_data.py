# gst_compliance/domain/reference_data.py
"""
Static GST lookup tables: rate schedule, HSN/SAC default rates, state codes.
"""

from __future__ import annotations

from decimal import Decimal

GST_RATES: tuple[int, ...] = (0, 5, 12, 18, 28)

# (code, description, default GST rate %)
HSN_CODES: tuple[tuple[str, str, int], ...] = (
    ("0101", "Live horses, asses, mules and hinnies", 0),
    ("0201", "Meat of bovine animals, fresh or chilled", 0),
    ("1001", "Wheat and meslin", 0),
    ("1006", "Rice", 5),
    ("2201", "Waters, including mineral waters", 18),
    ("3004", "Medicaments", 12),
    ("6109", "T-shirts, singlets and other vests, knitted", 5),
    ("6203", "Men's suits, jackets, trousers", 12),
    ("8471", "Computers and peripheral equipment", 18),
    ("8517", "Telephone sets, smartphones", 18),
    ("8528", "Television receivers", 28),
    ("8703", "Motor cars and vehicles", 28),
    ("9401", "Seats and furniture", 18),
    ("9403", "Other furniture and parts", 18),
    ("9503", "Toys and games", 12),
    ("9954", "Construction services", 18),
    ("9971", "Financial and related services", 18),
    ("9972", "Real estate services", 18),
    ("9973", "Leasing or rental services", 18),
    ("9983", "Other professional services", 18),
    ("9984", "Telecommunication services", 18),
    ("9985", "Transport of passengers", 5),
    ("9986", "Transport of goods", 5),
    ("9987", "Supply of food/beverages", 5),
    ("9988", "Manufacturing services", 18),
    ("9991", "Public administration services", 18),
    ("9992", "Education services", 0),
    ("9993", "Health care services", 0),
    ("9995", "Recreation and sporting services", 18),
    ("9996", "Personal services", 18),
    ("9997", "Other services", 18),
)

# GST state / UT codes (25 was merged into 26)
INDIAN_STATES: tuple[tuple[str, str], ...] = (
    ("01", "Jammu and Kashmir"),
    ("02", "Himachal Pradesh"),
    ("03", "Punjab"),
    ("04", "Chandigarh"),
    ("05", "Uttarakhand"),
    ("06", "Haryana"),
    ("07", "Delhi"),
    ("08", "Rajasthan"),
    ("09", "Uttar Pradesh"),
    ("10", "Bihar"),
    ("11", "Sikkim"),
    ("12", "Arunachal Pradesh"),
    ("13", "Nagaland"),
    ("14", "Manipur"),
    ("15", "Mizoram"),
    ("16", "Tripura"),
    ("17", "Meghalaya"),
    ("18", "Assam"),
    ("19", "West Bengal"),
    ("20", "Jharkhand"),
    ("21", "Odisha"),
    ("22", "Chhattisgarh"),
    ("23", "Madhya Pradesh"),
    ("24", "Gujarat"),
    ("26", "Dadra and Nagar Haveli and Daman and Diu"),
    ("27", "Maharashtra"),
    ("28", "Andhra Pradesh (Old)"),
    ("29", "Karnataka"),
    ("30", "Goa"),
    ("31", "Lakshadweep"),
    ("32", "Kerala"),
    ("33", "Tamil Nadu"),
    ("34", "Puducherry"),
    ("35", "Andaman and Nicobar Islands"),
    ("36", "Telangana"),
    ("37", "Andhra Pradesh"),
    ("38", "Ladakh"),
)

_STATE_BY_CODE = dict(INDIAN_STATES)
_HSN_BY_CODE = {code: (desc, rate) for code, desc, rate in HSN_CODES}


def is_valid_gst_rate(rate) -> bool:
    try:
        return Decimal(str(rate)) in {Decimal(r) for r in GST_RATES}
    except ArithmeticError:
        return False


def is_valid_state_code(code: str | None) -> bool:
    return bool(code) and code in _STATE_BY_CODE


def state_name(code: str | None) -> str | None:
    if not code:
        return None
    return _STATE_BY_CODE.get(code)


def hsn_default_rate(code: str | None) -> int | None:
    """Default GST rate for an HSN/SAC code.

    Matches the exact code first, then its 4-digit heading
    (``84715000`` -> ``8471``). Returns None for unknown codes.
    """
    if not code:
        return None
    code = code.strip()
    hit = _HSN_BY_CODE.get(code) or _HSN_BY_CODE.get(code[:4])
    return hit[1] if hit else None
